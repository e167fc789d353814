"""Idempotent schema creation and the fixed sample data set."""
import logging
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import func, select, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from hospital_network.core.db import Base, make_engine
from hospital_network.models import (
    Appointment, AppointmentStatus, Clinic, Doctor, DoctorSpecialty, MedicalRecord,
    Patient, Payment, PaymentMethod, Service, Specialty,
)

logger = logging.getLogger(__name__)

CLINICS = [
    dict(id=1, name="Lagos Central Clinic", address="12 Adeola Odeku St, Victoria Island, Lagos",
         phone="+2348012345678", email="lagos@hospitalgroup.com"),
    dict(id=2, name="Abuja Specialist Clinic", address="45 Aminu Kano Cres, Wuse II, Abuja",
         phone="+2348023456789", email="abuja@hospitalgroup.com"),
    dict(id=3, name="Ibadan General Clinic", address="30 Dugbe Market Rd, Ibadan, Oyo",
         phone="+2348034567890", email="ibadan@hospitalgroup.com"),
]

SPECIALTIES = [
    dict(id=1, name="Cardiology", description="Heart and blood vessel specialists"),
    dict(id=2, name="Pediatrics", description="Child health and medical care"),
    dict(id=3, name="Dermatology", description="Skin, hair, and nail care"),
    dict(id=4, name="Orthopedics", description="Bone, joint, and muscle care"),
    dict(id=5, name="General Medicine", description="Primary care and general health"),
]

DOCTORS = [
    dict(id=1, clinic_id=1, first_name="Chinedu", last_name="Okafor",
         phone="+2348101111111", email="cokafor@hospitalgroup.com"),
    dict(id=2, clinic_id=1, first_name="Aisha", last_name="Bello",
         phone="+2348102222222", email="abello@hospitalgroup.com"),
    dict(id=3, clinic_id=2, first_name="Emeka", last_name="Umeh",
         phone="+2348103333333", email="eumeh@hospitalgroup.com"),
    dict(id=4, clinic_id=2, first_name="Fatima", last_name="Suleiman",
         phone="+2348104444444", email="fsuleiman@hospitalgroup.com"),
    dict(id=5, clinic_id=3, first_name="Babatunde", last_name="Adeyemi",
         phone="+2348105555555", email="badeyemi@hospitalgroup.com"),
]

DOCTOR_SPECIALTIES = [(1, 1), (2, 2), (3, 3), (3, 5), (4, 4), (5, 5)]

SERVICES = [
    dict(id=1, clinic_id=1, name="General Consultation", description="Basic health check with doctor",
         duration_minutes=30, price=Decimal("10000.00")),
    dict(id=2, clinic_id=1, name="Pediatric Checkup", description="Child medical check",
         duration_minutes=30, price=Decimal("12000.00")),
    dict(id=3, clinic_id=2, name="Dermatology Consultation", description="Skin care and treatment",
         duration_minutes=40, price=Decimal("15000.00")),
    dict(id=4, clinic_id=2, name="Orthopedic Consultation", description="Bone & joint care",
         duration_minutes=45, price=Decimal("18000.00")),
    dict(id=5, clinic_id=3, name="General Medicine", description="Routine health consultation",
         duration_minutes=30, price=Decimal("8000.00")),
    dict(id=6, clinic_id=3, name="Vaccination", description="Routine immunizations",
         duration_minutes=20, price=Decimal("3500.00")),
]

PATIENTS = [
    dict(id=1, first_name="Oluwaseun", last_name="Adekunle", phone="+2347011111111",
         email="seun.adekunle@outlook.com", date_of_birth=date(1990, 5, 14)),
    dict(id=2, first_name="Ngozi", last_name="Eze", phone="+2347022222222",
         email="ngozi.eze@gmail.com", date_of_birth=date(1985, 8, 20)),
    dict(id=3, first_name="Ibrahim", last_name="Lawal", phone="+2347033333333",
         email="ibrahim.lawal@yahoo.com", date_of_birth=date(2000, 12, 2)),
    dict(id=4, first_name="Funke", last_name="Olatunji", phone="+2347044444444",
         email="funke.olatunji@outlook.com", date_of_birth=date(1995, 3, 25)),
    dict(id=5, first_name="Samuel", last_name="Okon", phone="+2347055567455",
         email="samuel.okon@gmail.com", date_of_birth=date(1988, 7, 10)),
]

APPOINTMENTS = [
    dict(id=1, patient_id=1, doctor_id=1, clinic_id=1, service_id=1,
         appointment_date=datetime(2025, 9, 25, 10, 0), status=AppointmentStatus.Scheduled,
         notes="Chest pain consultation"),
    dict(id=2, patient_id=2, doctor_id=2, clinic_id=1, service_id=2,
         appointment_date=datetime(2025, 9, 26, 9, 30), status=AppointmentStatus.Completed,
         notes="Child fever follow-up"),
    dict(id=3, patient_id=3, doctor_id=3, clinic_id=2, service_id=3,
         appointment_date=datetime(2025, 9, 26, 14, 0), status=AppointmentStatus.Scheduled,
         notes="Skin rash diagnosis"),
    dict(id=4, patient_id=4, doctor_id=4, clinic_id=2, service_id=4,
         appointment_date=datetime(2025, 9, 27, 11, 0), status=AppointmentStatus.Scheduled,
         notes="Knee pain check"),
    dict(id=5, patient_id=5, doctor_id=5, clinic_id=3, service_id=5,
         appointment_date=datetime(2025, 9, 27, 15, 0), status=AppointmentStatus.Completed,
         notes="General health screening"),
]

# varios pagos por turno: Seun e Ibrahim pagaron en dos partes
PAYMENTS = [
    dict(id=1, appointment_id=1, amount=Decimal("5000.00"), method=PaymentMethod.Transfer),
    dict(id=2, appointment_id=1, amount=Decimal("5000.00"), method=PaymentMethod.Cash),
    dict(id=3, appointment_id=2, amount=Decimal("12000.00"), method=PaymentMethod.Insurance),
    dict(id=4, appointment_id=3, amount=Decimal("7500.00"), method=PaymentMethod.Card),
    dict(id=5, appointment_id=3, amount=Decimal("7500.00"), method=PaymentMethod.Cash),
    dict(id=6, appointment_id=5, amount=Decimal("8000.00"), method=PaymentMethod.Cash),
]

MEDICAL_RECORDS = [
    dict(id=1, patient_id=1, appointment_id=1, record_date=date(2025, 9, 25),
         notes="Patient reported chest pain. ECG scheduled."),
    dict(id=2, patient_id=2, appointment_id=2, record_date=date(2025, 9, 26),
         notes="Child had mild fever, responded to paracetamol."),
    dict(id=3, patient_id=3, appointment_id=3, record_date=date(2025, 9, 26),
         notes="Skin rash under review, possible eczema."),
    dict(id=4, patient_id=5, appointment_id=5, record_date=date(2025, 9, 27),
         notes="Routine health screening completed. Normal results."),
]


async def create_database(url: str) -> None:
    """CREATE DATABASE IF NOT EXISTS for MySQL; other engines create the file on connect."""
    parsed = make_url(url)
    if not parsed.get_backend_name().startswith("mysql") or not parsed.database:
        return
    server = make_engine(parsed.set(database=None))
    try:
        async with server.begin() as conn:
            await conn.execute(text(
                f"CREATE DATABASE IF NOT EXISTS `{parsed.database}` "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            ))
        logger.info("Database %s ready", parsed.database)
    finally:
        await server.dispose()


async def create_schema(engine: AsyncEngine) -> None:
    # create_all sólo crea lo que falta (CREATE TABLE IF NOT EXISTS)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready (%d tables)", len(Base.metadata.tables))


async def load_sample_data(session: AsyncSession) -> bool:
    """Insert the sample rows once; returns False when data is already there."""
    existing = (await session.execute(select(func.count(Clinic.id)))).scalar_one()
    if existing:
        logger.info("Sample data skipped: %d clinics already present", existing)
        return False

    # en orden de dependencia; un flush por tabla
    batches = [
        [Clinic(**row) for row in CLINICS],
        [Specialty(**row) for row in SPECIALTIES],
        [Doctor(**row) for row in DOCTORS],
        [DoctorSpecialty(doctor_id=d, specialty_id=s) for d, s in DOCTOR_SPECIALTIES],
        [Service(**row) for row in SERVICES],
        [Patient(**row) for row in PATIENTS],
        [Appointment(**row) for row in APPOINTMENTS],
        [Payment(**row) for row in PAYMENTS],
        [MedicalRecord(**row) for row in MEDICAL_RECORDS],
    ]
    for batch in batches:
        session.add_all(batch)
        await session.flush()
    await session.commit()
    logger.info("Sample data loaded: %s", {b[0].__tablename__: len(b) for b in batches})
    return True
