"""Create the database, its tables and the sample rows.

    python -m hospital_network.bootstrap [--no-sample] [--clinic ID]

Safe to run more than once: tables are only created when missing and the
sample rows are only loaded into an empty database.
"""
import argparse
import asyncio
import logging

from hospital_network.core.config import settings
from hospital_network.core.db import make_engine, make_sessionmaker
from hospital_network.core.logging import configure_logging
from hospital_network.services.queries import upcoming_appointments
from hospital_network.services.sample_data import create_database, create_schema, load_sample_data

logger = logging.getLogger("hospital_network.bootstrap")


async def run(load_sample: bool = True, clinic_id: int | None = None, url: str | None = None) -> None:
    url = url or settings.async_database_url
    await create_database(url)
    engine = make_engine(url)
    session_factory = make_sessionmaker(engine)
    try:
        await create_schema(engine)
        if load_sample:
            async with session_factory() as session:
                await load_sample_data(session)
        if clinic_id is not None:
            async with session_factory() as session:
                rows = await upcoming_appointments(session, clinic_id)
            logger.info("Clinic %s has %d appointments", clinic_id, len(rows))
            for r in rows:
                logger.info("  #%s %s %s with Dr. %s (%s) at %s", r.appointment_id, r.patient_first_name,
                            r.patient_last_name, r.doctor_first_name, r.service_name,
                            r.appointment_date.isoformat(sep=" "))
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--no-sample", action="store_true", help="only create the schema")
    parser.add_argument("--clinic", type=int, default=None, help="list the appointments of this clinic")
    args = parser.parse_args(argv)

    configure_logging()
    asyncio.run(run(load_sample=not args.no_sample, clinic_id=args.clinic))


if __name__ == "__main__":
    main()
