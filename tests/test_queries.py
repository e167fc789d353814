"""
Read queries: clinic appointment listing, payment totals, and the reports on
double bookings and payment balances.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from hospital_network.core.errors import RecordNotFound
from hospital_network.models import (
    Appointment,
    AppointmentStatus,
    Clinic,
    Doctor,
    MedicalRecord,
    Patient,
    Payment,
    PaymentMethod,
    Service,
)
from hospital_network.services import queries, records


# ============================================================================
# CLINIC APPOINTMENTS
# ============================================================================


@pytest.mark.asyncio
async def test_upcoming_appointments_for_lagos(db):
    rows = await queries.upcoming_appointments(db, clinic_id=1)

    assert [r.appointment_id for r in rows] == [1, 2]
    assert [r.doctor_first_name for r in rows] == ["Chinedu", "Aisha"]
    assert rows[0].patient_first_name == "Oluwaseun"
    assert rows[0].patient_last_name == "Adekunle"
    assert rows[0].service_name == "General Consultation"
    assert rows[1].service_name == "Pediatric Checkup"
    assert rows[0].appointment_date < rows[1].appointment_date
    assert rows[1].appointment_date == datetime(2025, 9, 26, 9, 30)


@pytest.mark.asyncio
async def test_upcoming_appointments_ordered_by_date_not_id(db):
    await records.insert(db, Appointment(
        patient_id=5, doctor_id=2, clinic_id=1, service_id=2,
        appointment_date=datetime(2025, 9, 24, 8, 0),
    ))
    await db.commit()

    rows = await queries.upcoming_appointments(db, clinic_id=1)
    assert [r.appointment_id for r in rows] == [6, 1, 2]


@pytest.mark.asyncio
async def test_upcoming_appointments_since(db):
    rows = await queries.upcoming_appointments(db, clinic_id=2, since=datetime(2025, 9, 27))
    assert [r.appointment_id for r in rows] == [4]


@pytest.mark.asyncio
async def test_upcoming_appointments_empty_clinic(db):
    clinic = await records.insert(db, Clinic(name="Port Harcourt Clinic", address="8 Aba Rd, Port Harcourt"))
    await db.commit()
    assert await queries.upcoming_appointments(db, clinic_id=clinic.id) == []


# ============================================================================
# PAYMENTS
# ============================================================================


@pytest.mark.asyncio
async def test_split_payment_totals(session):
    clinic = await records.insert(session, Clinic(name="Lagos Central Clinic", address="12 Adeola Odeku St"))
    doctor = await records.insert(session, Doctor(clinic_id=clinic.id, first_name="Chinedu", last_name="Okafor"))
    patient = await records.insert(session, Patient(first_name="Oluwaseun", last_name="Adekunle"))
    service = await records.insert(session, Service(
        clinic_id=clinic.id, name="General Consultation", price=Decimal("10000.00"),
    ))
    ap = await records.insert(session, Appointment(
        patient_id=patient.id, doctor_id=doctor.id, clinic_id=clinic.id, service_id=service.id,
        appointment_date=datetime(2025, 9, 25, 10, 0),
    ))
    await records.insert(session, Payment(appointment_id=ap.id, amount=Decimal("5000"), method=PaymentMethod.Transfer))
    await records.insert(session, Payment(appointment_id=ap.id, amount=Decimal("5000"), method=PaymentMethod.Cash))
    await session.commit()

    total = await queries.total_paid(session, ap.id)
    assert total.payments == 2
    assert total.total == Decimal("10000.00")
    assert str(total.total) == "10000.00"


@pytest.mark.asyncio
async def test_total_paid_sample_data(db):
    assert (await queries.total_paid(db, 1)).total == Decimal("10000.00")
    assert (await queries.total_paid(db, 3)).payments == 2


@pytest.mark.asyncio
async def test_total_paid_without_payments_is_zero(db):
    total = await queries.total_paid(db, 4)
    assert total.payments == 0
    assert total.total == Decimal("0.00")


@pytest.mark.asyncio
async def test_payment_balances_flags_unpaid_appointment(db):
    balances = await queries.payment_balances(db)

    assert [b.appointment_id for b in balances] == [1, 2, 3, 4, 5]
    by_id = {b.appointment_id: b for b in balances}
    assert by_id[1].state == "paid"
    assert by_id[4].state == "underpaid"
    assert by_id[4].balance == Decimal("18000.00")
    assert by_id[4].total_paid == Decimal("0.00")

    mismatched = await queries.payment_balances(db, only_mismatched=True)
    assert [b.appointment_id for b in mismatched] == [4]


@pytest.mark.asyncio
async def test_payment_balances_flags_overpayment(db):
    await records.insert(db, Payment(appointment_id=5, amount=Decimal("500.00"), method=PaymentMethod.Cash))
    await db.commit()

    [balance] = await queries.payment_balances(db, clinic_id=3)
    assert balance.state == "overpaid"
    assert balance.balance == Decimal("-500.00")


# ============================================================================
# DOUBLE BOOKINGS
# ============================================================================


@pytest.mark.asyncio
async def test_no_double_bookings_in_sample_data(db):
    assert await queries.double_bookings(db) == []


@pytest.mark.asyncio
async def test_double_booking_reported(db):
    await records.insert(db, Appointment(
        patient_id=3, doctor_id=1, clinic_id=1, service_id=1,
        appointment_date=datetime(2025, 9, 25, 10, 0),
    ))
    # cancelado: no cuenta
    await records.insert(db, Appointment(
        patient_id=4, doctor_id=1, clinic_id=1, service_id=1,
        appointment_date=datetime(2025, 9, 25, 10, 0), status=AppointmentStatus.Cancelled,
    ))
    await db.commit()

    [booking] = await queries.double_bookings(db)
    assert booking.doctor_id == 1
    assert booking.appointment_date == datetime(2025, 9, 25, 10, 0)
    assert booking.appointment_ids == [1, 6]
    assert await queries.double_bookings(db, clinic_id=2) == []


# ============================================================================
# REFERRALS / HISTORY
# ============================================================================


@pytest.mark.asyncio
async def test_doctors_with_specialty_across_clinics(db):
    rows = await queries.doctors_with_specialty(db, "General Medicine")

    assert [(r.doctor_id, r.clinic_name) for r in rows] == [
        (3, "Abuja Specialist Clinic"),
        (5, "Ibadan General Clinic"),
    ]


@pytest.mark.asyncio
async def test_doctors_with_unknown_specialty(db):
    assert await queries.doctors_with_specialty(db, "Neurology") == []


@pytest.mark.asyncio
async def test_patient_history(db):
    entry = await records.insert(db, MedicalRecord(patient_id=1, record_date=date(2025, 10, 2), notes="ECG normal."))
    await db.commit()

    history = await queries.patient_history(db, 1)
    assert [r.record_date for r in history] == [date(2025, 9, 25), date(2025, 10, 2)]
    assert history[1].id == entry.id
    assert history[1].appointment_id is None


@pytest.mark.asyncio
async def test_patient_history_unknown_patient(db):
    with pytest.raises(RecordNotFound):
        await queries.patient_history(db, 404)
