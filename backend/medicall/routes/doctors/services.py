import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.config.constants import EventName
from medicall.core.websocket_manager import ConnectionManager
from medicall.db.crud import doctor as doctor_crud
from medicall.schemas.doctor import Doctor, DoctorIn

# medicall/routes/doctors/services.py
logger = logging.getLogger(__name__)


async def save_doctor(db: AsyncSession, manager: ConnectionManager, data: DoctorIn) -> Doctor:
    """Upsert with full child replace, then publish the hydrated record to every client."""
    result = await doctor_crud.upsert_doctor(db, data)
    if isinstance(result, dict) and "status" in result:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=result["message"])
    if result is None:
        # committed, then removed by a concurrent delete before the re-read
        logger.warning(f"Doctor {data.id} vanished right after being saved")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor was deleted while saving")

    doctor = Doctor.model_validate(result)
    await manager.broadcast(EventName.DOCTOR_UPDATED, doctor.to_wire())
    return doctor


async def remove_doctor(db: AsyncSession, manager: ConnectionManager, doctor_id: str) -> bool:
    """Delete a doctor. Returns False when no row matched (nothing is published then)."""
    try:
        deleted = await doctor_crud.delete_doctor(db, doctor_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting doctor_id={doctor_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if deleted == 0:
        return False
    await manager.broadcast(EventName.DOCTOR_DELETED, doctor_id)
    return True


async def remove_visit(
    db: AsyncSession, manager: ConnectionManager, doctor_id: str, visit_id: str
) -> Doctor:
    """Delete one visit and publish the whole parent doctor, not just the visit."""
    try:
        parent = await doctor_crud.delete_visit(db, doctor_id, visit_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting visit_id={visit_id} of doctor_id={doctor_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if parent is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")

    doctor = Doctor.model_validate(parent)
    await manager.broadcast(EventName.DOCTOR_UPDATED, doctor.to_wire())
    return doctor
