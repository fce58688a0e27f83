from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from medicall.core.middleware import get_db, get_broadcaster
from medicall.core.websocket_manager import ConnectionManager
from medicall.db.crud.doctor import list_doctors
from medicall.routes.doctors.services import save_doctor, remove_doctor, remove_visit
from medicall.schemas.doctor import Doctor, DoctorIn, DeleteVisitResponse
from medicall.schemas.shared import SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctors", tags=["doctors"])

@router.get("", response_model=List[Doctor])
async def list_doctors_route(db: AsyncSession = Depends(get_db)):
    """All doctors with visits and schedule"""
    try:
        return await list_doctors(db)
    except Exception as e:
        logger.error(f"Error listing doctors: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.post("", response_model=Doctor)
async def save_doctor_route(
    doctor: DoctorIn,
    db: AsyncSession = Depends(get_db),
    manager: ConnectionManager = Depends(get_broadcaster),
):
    """Create or update a doctor, replacing visits/schedule when they are sent"""
    return await save_doctor(db, manager, doctor)

@router.delete("/{doctor_id}", response_model=SuccessResponse)
async def delete_doctor_route(
    doctor_id: str,
    db: AsyncSession = Depends(get_db),
    manager: ConnectionManager = Depends(get_broadcaster),
):
    if not await remove_doctor(db, manager, doctor_id):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "Not found."},
        )
    return SuccessResponse(success=True, message="Deleted.")

@router.delete("/{doctor_id}/visits/{visit_id}", response_model=DeleteVisitResponse)
async def delete_visit_route(
    doctor_id: str,
    visit_id: str,
    db: AsyncSession = Depends(get_db),
    manager: ConnectionManager = Depends(get_broadcaster),
):
    doctor = await remove_visit(db, manager, doctor_id, visit_id)
    return DeleteVisitResponse(success=True, result=doctor)
