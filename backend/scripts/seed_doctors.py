import asyncio
import sys
from pathlib import Path

# Add the parent directory to sys.path to allow importing from medicall
backend_dir = Path(__file__).parent.parent
sys.path.append(str(backend_dir))

from medicall.config.settings import settings
from medicall.data.default_doctors import default_doctors
from medicall.db.base import create_tables, get_engine, get_session_factory
from medicall.db.crud.doctor import get_doctor, upsert_doctor
from medicall.schemas.doctor import DoctorIn

async def main() -> None:
    print("Connecting to database at:", settings.database_url)
    engine = await get_engine(settings.database_url)
    await create_tables(engine)
    async_session = await get_session_factory(engine)

    async with async_session() as db:
        for doctor in default_doctors():
            # Check if doctor already exists to avoid clobbering edited records
            if await get_doctor(db, doctor.id) is not None:
                print(f"Doctor {doctor.id} already exists. Skipping.")
                continue

            result = await upsert_doctor(db, DoctorIn.model_validate(doctor.model_dump()))
            if isinstance(result, dict):
                print(f"Failed to add {doctor.id}: {result['message']}")
                continue
            print(f"Added doctor: {doctor.name} ({doctor.id}), specialty: {doctor.specialty}, "
                  f"visits: {len(doctor.visits)}, schedule slots: {len(doctor.schedule)}")

    print("Default doctors are in the database.")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(main())
