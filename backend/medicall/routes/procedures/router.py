from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from medicall.config.constants import EventName
from medicall.core.middleware import get_db, get_broadcaster
from medicall.core.websocket_manager import ConnectionManager
from medicall.db.crud.procedure import list_procedures, upsert_procedure, delete_procedure
from medicall.schemas.procedure import Procedure, DeleteProcedureResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/procedures", tags=["procedures"])

@router.get("", response_model=List[Procedure])
async def list_procedures_route(db: AsyncSession = Depends(get_db)):
    try:
        return await list_procedures(db)
    except Exception as e:
        logger.error(f"Error listing procedures: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.post("", response_model=Procedure)
async def save_procedure_route(
    procedure: Procedure,
    db: AsyncSession = Depends(get_db),
    manager: ConnectionManager = Depends(get_broadcaster),
):
    """Create or overwrite a procedure by id and publish it"""
    result = await upsert_procedure(db, procedure)
    if isinstance(result, dict) and "status" in result:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=result["message"])

    saved = Procedure.model_validate(result)
    await manager.broadcast(EventName.PROCEDURE_UPDATED, saved.to_wire())
    return saved

@router.delete("/{procedure_id}", response_model=DeleteProcedureResponse)
async def delete_procedure_route(
    procedure_id: str,
    db: AsyncSession = Depends(get_db),
    manager: ConnectionManager = Depends(get_broadcaster),
):
    try:
        deleted = await delete_procedure(db, procedure_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting procedure_id={procedure_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    # published even when nothing matched; clients just drop an id they do not hold
    await manager.broadcast(EventName.PROCEDURE_DELETED, procedure_id)
    return DeleteProcedureResponse(success=True, result=deleted)
