import logging
from typing import List, Dict, Any, Union

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.db.models import ProcedureModel
from medicall.schemas.procedure import Procedure

logger = logging.getLogger(__name__)


async def list_procedures(db: AsyncSession) -> List[ProcedureModel]:
    result = await db.execute(select(ProcedureModel).order_by(ProcedureModel.date, ProcedureModel.time))
    return result.scalars().all()


async def upsert_procedure(
    db: AsyncSession, data: Procedure
) -> Union[ProcedureModel, Dict[str, Any]]:
    """
    Create or overwrite a procedure by its client-supplied id.

    Single table, no child rows: the lookup and the write are not grouped under
    an explicit transaction of their own.
    """
    logger.info(f"CRUD: Upserting procedure_id={data.id}")
    try:
        procedure = await db.get(ProcedureModel, data.id)
        if procedure is None:
            procedure = ProcedureModel(**data.model_dump())
            db.add(procedure)
        else:
            for name, value in data.model_dump(exclude={"id"}, exclude_unset=True).items():
                if name in ProcedureModel.SCALAR_FIELDS:
                    setattr(procedure, name, value)
        await db.commit()
        await db.refresh(procedure)
        return procedure
    except Exception as e:
        await db.rollback()
        logger.error(
            f"CRUD: Error saving procedure_id={data.id}. Error: {type(e).__name__} - {e}",
            exc_info=True,
        )
        return {"status": "error", "message": str(e)}


async def delete_procedure(db: AsyncSession, procedure_id: str) -> int:
    result = await db.execute(delete(ProcedureModel).where(ProcedureModel.id == procedure_id))
    await db.commit()
    logger.info(f"CRUD: delete procedure_id={procedure_id} removed {result.rowcount} row(s)")
    return result.rowcount
