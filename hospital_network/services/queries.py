"""Read queries over the records store.

``double_bookings`` and ``payment_balances`` report the two gaps the schema
leaves open (a doctor booked twice at the same time, payments that do not
match the service price). They only report; nothing is rejected.
"""
import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.core.errors import RecordNotFound
from hospital_network.models.appointment import Appointment, AppointmentStatus
from hospital_network.models.clinic import Clinic
from hospital_network.models.doctor import Doctor
from hospital_network.models.links import DoctorSpecialty
from hospital_network.models.medical_record import MedicalRecord
from hospital_network.models.patient import Patient
from hospital_network.models.payment import Payment
from hospital_network.models.service import Service
from hospital_network.models.specialty import Specialty
from hospital_network.schemas.appointment import DoubleBooking, UpcomingAppointment
from hospital_network.schemas.doctor import SpecialistOut
from hospital_network.schemas.payment import PaymentBalance, PaymentTotal

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    # SQLite devuelve float en los agregados; MySQL, Decimal
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS)


def _active():
    return or_(Appointment.status.is_(None), Appointment.status != AppointmentStatus.Cancelled)


async def upcoming_appointments(session: AsyncSession, clinic_id: int,
                                since: datetime | None = None) -> list[UpcomingAppointment]:
    """Appointments of one clinic with patient, doctor and service names, oldest first."""
    q = (
        select(
            Appointment.id,
            Patient.first_name,
            Patient.last_name,
            Doctor.first_name.label("doctor"),
            Service.name.label("service"),
            Appointment.appointment_date,
        )
        .join(Patient, Appointment.patient_id == Patient.id)
        .join(Doctor, Appointment.doctor_id == Doctor.id)
        .join(Service, Appointment.service_id == Service.id)
        .where(Appointment.clinic_id == clinic_id)
    )
    if since is not None:
        q = q.where(Appointment.appointment_date >= since)
    rows = (await session.execute(q.order_by(Appointment.appointment_date, Appointment.id))).all()
    return [
        UpcomingAppointment(
            appointment_id=r[0],
            patient_first_name=r[1],
            patient_last_name=r[2],
            doctor_first_name=r[3],
            service_name=r[4],
            appointment_date=r[5],
        )
        for r in rows
    ]


async def total_paid(session: AsyncSession, appointment_id: int) -> PaymentTotal:
    q = select(func.sum(Payment.amount), func.count(Payment.id)).where(
        Payment.appointment_id == appointment_id
    )
    total, count = (await session.execute(q)).one()
    return PaymentTotal(appointment_id=appointment_id, total=_money(total), payments=count)


async def double_bookings(session: AsyncSession, clinic_id: int | None = None) -> list[DoubleBooking]:
    """Doctor/timestamp pairs with more than one non-cancelled appointment."""
    q = (
        select(Appointment.doctor_id, Appointment.appointment_date)
        .where(_active())
        .group_by(Appointment.doctor_id, Appointment.appointment_date)
        .having(func.count(Appointment.id) > 1)
    )
    if clinic_id is not None:
        q = q.where(Appointment.clinic_id == clinic_id)
    pairs = (await session.execute(q)).all()

    out: list[DoubleBooking] = []
    for doctor_id, when in pairs:
        ids_q = select(Appointment.id).where(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_date == when,
            _active(),
        )
        if clinic_id is not None:
            ids_q = ids_q.where(Appointment.clinic_id == clinic_id)
        ids = (await session.execute(ids_q.order_by(Appointment.id))).scalars().all()
        out.append(DoubleBooking(doctor_id=doctor_id, appointment_date=when, appointment_ids=list(ids)))
    if out:
        logger.warning("Found %d double-booked doctor slots", len(out))
    return sorted(out, key=lambda b: (b.appointment_date, b.doctor_id))


async def payment_balances(session: AsyncSession, clinic_id: int | None = None,
                           only_mismatched: bool = False) -> list[PaymentBalance]:
    """Service price against the sum of payments, per appointment."""
    paid = (
        select(Payment.appointment_id, func.sum(Payment.amount).label("paid"))
        .group_by(Payment.appointment_id)
        .subquery()
    )
    q = (
        select(Appointment.id, Appointment.clinic_id, Service.price, paid.c.paid)
        .join(Service, Appointment.service_id == Service.id)
        .outerjoin(paid, paid.c.appointment_id == Appointment.id)
    )
    if clinic_id is not None:
        q = q.where(Appointment.clinic_id == clinic_id)

    out: list[PaymentBalance] = []
    for appointment_id, appt_clinic, price, paid_sum in (await session.execute(q.order_by(Appointment.id))).all():
        price = _money(price)
        total = _money(paid_sum)
        balance = price - total
        state = "paid" if balance == 0 else ("underpaid" if balance > 0 else "overpaid")
        if only_mismatched and state == "paid":
            continue
        out.append(PaymentBalance(
            appointment_id=appointment_id,
            clinic_id=appt_clinic,
            service_price=price,
            total_paid=total,
            balance=balance,
            state=state,
        ))
    return out


async def doctors_with_specialty(session: AsyncSession, specialty_name: str) -> list[SpecialistOut]:
    """Doctors of any clinic holding a specialty; used to refer patients across branches."""
    q = (
        select(Doctor.id, Doctor.first_name, Doctor.last_name, Clinic.id, Clinic.name)
        .join(DoctorSpecialty, DoctorSpecialty.doctor_id == Doctor.id)
        .join(Specialty, Specialty.id == DoctorSpecialty.specialty_id)
        .join(Clinic, Clinic.id == Doctor.clinic_id)
        .where(Specialty.name == specialty_name)
        .order_by(Clinic.id, Doctor.id)
    )
    return [
        SpecialistOut(doctor_id=r[0], first_name=r[1], last_name=r[2], clinic_id=r[3], clinic_name=r[4])
        for r in (await session.execute(q)).all()
    ]


async def patient_history(session: AsyncSession, patient_id: int) -> list[MedicalRecord]:
    exists = (await session.execute(select(Patient.id).where(Patient.id == patient_id))).scalar_one_or_none()
    if exists is None:
        raise RecordNotFound("patients", patient_id)
    q = (
        select(MedicalRecord)
        .where(MedicalRecord.patient_id == patient_id)
        .order_by(MedicalRecord.record_date, MedicalRecord.id)
    )
    return list((await session.execute(q)).scalars().all())
