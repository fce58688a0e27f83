import asyncio
import sys
from pathlib import Path

# Add the parent directory to sys.path to allow importing from medicall
backend_dir = Path(__file__).parent.parent
sys.path.append(str(backend_dir))

from medicall.config.settings import settings
from medicall.db.base import get_engine, get_session_factory
from medicall.db.crud.doctor import list_doctors

async def main() -> None:
    print("Connecting to database at:", settings.database_url)
    engine = await get_engine(settings.database_url)
    async_session = await get_session_factory(engine)

    async with async_session() as db:
        doctors = await list_doctors(db)

        if not doctors:
            print("No doctors found in the database.")
        else:
            print(f"Found {len(doctors)} doctors in the database:")
            print("-" * 100)
            print(f"{'ID':<10} {'Name':<28} {'Specialty':<24} {'Executive':<16} {'Visits':>6} {'Slots':>6}")
            print("-" * 100)

            for doctor in doctors:
                print(
                    f"{doctor.id:<10} {(doctor.name or ''):<28} {(doctor.specialty or ''):<24} "
                    f"{(doctor.executive or ''):<16} {len(doctor.visits):>6} {len(doctor.schedule):>6}"
                )

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(main())
