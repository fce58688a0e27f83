import logging
from typing import Optional, List, Dict, Any, Union

from sqlalchemy import select, insert, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medicall.db.models import DoctorModel, VisitModel, ScheduleModel
from medicall.schemas.doctor import DoctorIn

logger = logging.getLogger(__name__)


def _hydrated():
    return select(DoctorModel).options(
        selectinload(DoctorModel.visits),
        selectinload(DoctorModel.schedule),
    )


async def list_doctors(db: AsyncSession) -> List[DoctorModel]:
    """Return every doctor with visits and schedule attached."""
    result = await db.execute(_hydrated().order_by(DoctorModel.name))
    doctors = result.scalars().all()
    logger.debug(f"CRUD: listed {len(doctors)} doctors")
    return doctors


async def get_doctor(db: AsyncSession, doctor_id: str) -> Optional[DoctorModel]:
    """Re-read a doctor with its children, bypassing anything cached in the session."""
    stmt = (
        _hydrated()
        .where(DoctorModel.id == doctor_id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def upsert_doctor(
    db: AsyncSession, data: DoctorIn
) -> Union[DoctorModel, Dict[str, Any], None]:
    """
    Create or update a doctor and replace its child collections in one transaction.

    Scalar fields present in ``data`` overwrite the stored ones. When ``data.visits``
    (or ``data.schedule``) is given, every stored row for this doctor is deleted and
    the given list is inserted in order, so storage ends up holding exactly the
    submitted set. A missing list leaves the stored children alone.

    Args:
        db (AsyncSession): The database session.
        data (DoctorIn): The complete doctor as edited by the client.

    Returns:
        Union[DoctorModel, Dict[str, Any], None]: The re-read doctor with children on success,
        a dictionary with 'status' and 'message' keys after a rollback, or None when
        the doctor was deleted between the commit and the re-read.
    """
    logger.info(
        f"CRUD: Upserting doctor_id={data.id} "
        f"(visits={'keep' if data.visits is None else len(data.visits)}, "
        f"schedule={'keep' if data.schedule is None else len(data.schedule)})"
    )
    try:
        # 1. Find or create, then overwrite scalars
        doctor = await db.get(DoctorModel, data.id)
        if doctor is None:
            fields = data.model_dump(exclude={"visits", "schedule"})
            doctor = DoctorModel(**fields)
            db.add(doctor)
            await db.flush()
        else:
            fields = data.model_dump(exclude={"id", "visits", "schedule"}, exclude_unset=True)
            for name, value in fields.items():
                if name in DoctorModel.SCALAR_FIELDS:
                    setattr(doctor, name, value)

        # 2. Replace visits
        if data.visits is not None:
            await db.execute(delete(VisitModel).where(VisitModel.doctor_id == data.id))
            if data.visits:
                rows = [
                    {**visit.model_dump(), "doctor_id": data.id, "position": position}
                    for position, visit in enumerate(data.visits)
                ]
                await db.execute(insert(VisitModel), rows)

        # 3. Replace schedule
        if data.schedule is not None:
            await db.execute(delete(ScheduleModel).where(ScheduleModel.doctor_id == data.id))
            if data.schedule:
                rows = [
                    {**slot.model_dump(), "doctor_id": data.id, "position": position}
                    for position, slot in enumerate(data.schedule)
                ]
                await db.execute(insert(ScheduleModel), rows)

        # 4. Commit
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(
            f"CRUD: Error saving doctor_id={data.id}, rolled back. "
            f"Error: {type(e).__name__} - {e}",
            exc_info=True,
        )
        return {"status": "error", "message": str(e)}

    return await get_doctor(db, data.id)


async def delete_doctor(db: AsyncSession, doctor_id: str) -> int:
    """Delete a doctor; visits and schedule go with it. Returns rows removed."""
    result = await db.execute(delete(DoctorModel).where(DoctorModel.id == doctor_id))
    await db.commit()
    logger.info(f"CRUD: delete doctor_id={doctor_id} removed {result.rowcount} row(s)")
    return result.rowcount


async def delete_visit(
    db: AsyncSession, doctor_id: str, visit_id: str
) -> Optional[DoctorModel]:
    """
    Delete one visit, scoped to its owning doctor.

    Returns the parent doctor re-read with its remaining children, or None when the
    doctor does not exist.
    """
    result = await db.execute(
        delete(VisitModel).where(
            VisitModel.id == visit_id,
            VisitModel.doctor_id == doctor_id,
        )
    )
    await db.commit()
    logger.info(
        f"CRUD: delete visit_id={visit_id} of doctor_id={doctor_id} removed {result.rowcount} row(s)"
    )
    return await get_doctor(db, doctor_id)
