"""
Referential integrity of the records store: cascades, restricted deletes,
set-null, key changes and constraint violations on insert.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import insert

from hospital_network.core.errors import (
    ConstraintViolation,
    ForeignKeyViolation,
    NotNullViolation,
    RecordNotFound,
    RestrictedDeletion,
    UniqueConstraintViolation,
)
from hospital_network.models import (
    Appointment,
    AppointmentStatus,
    Clinic,
    Doctor,
    DoctorSpecialty,
    MedicalRecord,
    Patient,
    Payment,
    PaymentMethod,
    Prescription,
    Service,
    Specialty,
)
from hospital_network.services import integrity, records
from tests.helpers import count, scalars


def _prescription(appointment_id=1, patient_id=1, doctor_id=1) -> Prescription:
    return Prescription(
        appointment_id=appointment_id,
        patient_id=patient_id,
        doctor_id=doctor_id,
        medication="Aspirin",
        dosage="75mg daily",
        duration_days=30,
    )


# ============================================================================
# DELETE CASCADES
# ============================================================================


@pytest.mark.asyncio
async def test_delete_clinic_removes_its_doctors_services_and_appointments(db):
    plan = await records.delete(db, Clinic, 1)
    await db.commit()

    assert await count(db, Clinic, Clinic.id == 1) == 0
    assert await count(db, Doctor, Doctor.clinic_id == 1) == 0
    assert await count(db, Service, Service.clinic_id == 1) == 0
    assert await count(db, Appointment, Appointment.clinic_id == 1) == 0
    assert plan.deleted_counts == {
        "clinics": 1,
        "doctors": 2,
        "doctor_specialties": 2,
        "services": 2,
        "appointments": 2,
        "payments": 3,
    }
    # el resto de la red sigue intacto
    assert await count(db, Clinic) == 2
    assert await count(db, Doctor) == 3
    assert await count(db, Appointment) == 3


@pytest.mark.asyncio
async def test_delete_clinic_keeps_medical_records_with_null_appointment(db):
    plan = await records.delete(db, Clinic, 1)
    await db.commit()

    assert plan.nulled_counts == {"medical_records": 2}
    assert await scalars(db, MedicalRecord.id, MedicalRecord.appointment_id.is_(None)) == [1, 2]
    assert await count(db, MedicalRecord) == 4


@pytest.mark.asyncio
async def test_delete_clinic_also_removes_prescriptions_of_its_appointments(db):
    await records.insert(db, _prescription())
    await db.commit()

    await records.delete(db, Clinic, 1)
    await db.commit()

    assert await count(db, Prescription) == 0
    assert await count(db, Doctor, Doctor.id == 1) == 0


@pytest.mark.asyncio
async def test_delete_clinic_blocked_when_another_branch_uses_its_service(db):
    # paciente derivado: turno en Abuja con un servicio de Lagos
    await records.insert(db, Appointment(
        id=6, patient_id=3, doctor_id=3, clinic_id=2, service_id=1,
        appointment_date=datetime(2025, 10, 1, 9, 0),
    ))
    await db.commit()

    with pytest.raises(RestrictedDeletion) as exc_info:
        await records.delete(db, Clinic, 1)

    assert exc_info.value.blockers == {"appointments": 1}
    assert exc_info.value.table == "clinics"
    # nada se tocó
    assert await count(db, Clinic) == 3
    assert await count(db, Doctor, Doctor.clinic_id == 1) == 2
    assert await count(db, Payment) == 6


@pytest.mark.asyncio
async def test_delete_patient_cascades_to_appointments_payments_and_history(db):
    await records.delete(db, Patient, 1)
    await db.commit()

    assert await count(db, Appointment, Appointment.patient_id == 1) == 0
    assert await count(db, Payment, Payment.appointment_id == 1) == 0
    assert await count(db, MedicalRecord, MedicalRecord.patient_id == 1) == 0
    # el servicio usado sólo por ese turno sigue existiendo
    assert await count(db, Service, Service.id == 1) == 1


@pytest.mark.asyncio
async def test_delete_doctor_without_prescriptions_cascades(db):
    await records.delete(db, Doctor, 3)
    await db.commit()

    assert await count(db, Doctor, Doctor.id == 3) == 0
    assert await count(db, DoctorSpecialty, DoctorSpecialty.doctor_id == 3) == 0
    assert await count(db, Appointment, Appointment.id == 3) == 0
    assert await scalars(db, MedicalRecord.appointment_id, MedicalRecord.id == 3) == [None]
    # las especialidades no se borran
    assert await count(db, Specialty) == 5


@pytest.mark.asyncio
async def test_delete_appointment_removes_payments_and_prescriptions_nulls_records(db):
    await records.insert(db, _prescription(appointment_id=3, patient_id=3, doctor_id=3))
    await db.commit()

    plan = await records.delete(db, Appointment, 3)
    await db.commit()

    assert await count(db, Payment, Payment.appointment_id == 3) == 0
    assert await count(db, Prescription, Prescription.appointment_id == 3) == 0
    assert plan.deleted_counts == {"appointments": 1, "payments": 2, "prescriptions": 1}
    record = await db.get(MedicalRecord, 3)
    assert record is not None
    assert record.appointment_id is None
    assert record.notes == "Skin rash under review, possible eczema."


@pytest.mark.asyncio
async def test_delete_specialty_removes_links_only(db):
    await records.delete(db, Specialty, 5)
    await db.commit()

    assert await scalars(db, DoctorSpecialty.doctor_id, order_by=DoctorSpecialty.doctor_id) == [1, 2, 3, 4]
    assert await count(db, Doctor) == 5


@pytest.mark.asyncio
async def test_delete_junction_row_by_composite_key(db):
    await records.delete(db, DoctorSpecialty, (3, 5))
    await db.commit()

    assert await scalars(db, DoctorSpecialty.specialty_id, DoctorSpecialty.doctor_id == 3) == [3]


@pytest.mark.asyncio
async def test_delete_missing_row_raises_not_found(db):
    with pytest.raises(RecordNotFound) as exc_info:
        await records.delete(db, Clinic, 99)
    assert exc_info.value.table == "clinics"
    assert exc_info.value.key == 99


# ============================================================================
# RESTRICTED DELETES
# ============================================================================


@pytest.mark.asyncio
async def test_service_in_use_cannot_be_deleted(db):
    with pytest.raises(RestrictedDeletion) as exc_info:
        await records.delete(db, Service, 1)

    assert exc_info.value.blockers == {"appointments": 1}
    assert "services" in str(exc_info.value)
    assert await count(db, Service, Service.id == 1) == 1


@pytest.mark.asyncio
async def test_unused_service_can_be_deleted(db):
    # Vaccination (Ibadan) no tiene turnos
    await records.delete(db, Service, 6)
    await db.commit()
    assert await count(db, Service) == 5


@pytest.mark.asyncio
async def test_doctor_with_prescriptions_cannot_be_deleted(db):
    await records.insert(db, _prescription())
    await db.commit()

    with pytest.raises(RestrictedDeletion) as exc_info:
        await records.delete(db, Doctor, 1)

    assert exc_info.value.blockers == {"prescriptions": 1}
    doctor = await records.get(db, Doctor, 1)
    assert doctor.first_name == "Chinedu"
    assert await count(db, Appointment, Appointment.doctor_id == 1) == 1


@pytest.mark.asyncio
async def test_restricted_deletion_is_a_constraint_violation(db):
    with pytest.raises(ConstraintViolation):
        await records.delete(db, Service, 2)


@pytest.mark.asyncio
async def test_plan_delete_does_not_mutate(db):
    plan = await integrity.plan_delete(db, Service.__table__, (1,))

    assert plan.blocking_counts == {"appointments": 1}
    assert await count(db, Service) == 6
    with pytest.raises(RestrictedDeletion):
        await integrity.apply_plan(db, plan)


@pytest.mark.asyncio
async def test_delete_busy_clinic_walks_graph_once_per_service(db, monkeypatch):
    start = datetime(2025, 10, 1, 8, 0)
    await db.execute(insert(Appointment), [
        dict(
            patient_id=1 + i % 5,
            doctor_id=1 + i % 2,
            clinic_id=1,
            service_id=1 + i % 2,
            appointment_date=start + timedelta(minutes=30 * i),
        )
        for i in range(3000)
    ])
    await db.commit()

    walks = []
    reachable = integrity._reachable_without

    def counting(graph, root, avoid):
        walks.append(avoid)
        return reachable(graph, root, avoid)

    monkeypatch.setattr(integrity, "_reachable_without", counting)

    plan = await records.delete(db, Clinic, 1)
    await db.commit()

    assert plan.deleted_counts["appointments"] == 3002
    assert await count(db, Appointment, Appointment.clinic_id == 1) == 0
    # un recorrido por servicio de la clínica, no uno por turno
    assert sorted(key for _, key in walks) == [(1,), (2,)]


def test_reachable_without_skips_the_avoided_node():
    a, b, c, d = (("t", (1,)), ("t", (2,)), ("t", (3,)), ("t", (4,)))
    graph = {a: {b, c}, b: {d}, c: set()}

    assert integrity._reachable_without(graph, a, b) == {a, c}
    assert integrity._reachable_without(graph, a, c) == {a, b, d}
    assert integrity._reachable_without(graph, a, a) == set()


def test_referencing_edges_follow_model_metadata():
    from hospital_network.core.db import Base

    edges = integrity.referencing_edges(Base.metadata)
    services = Base.metadata.tables["services"]
    appointments = Base.metadata.tables["appointments"]

    rules = {(fk.parent.table.name, fk.parent.name): integrity._policy(fk) for fk in edges[services]}
    assert rules == {("appointments", "service_id"): integrity.RESTRICT}
    rules = {(fk.parent.table.name, fk.parent.name): integrity._policy(fk) for fk in edges[appointments]}
    assert rules == {
        ("payments", "appointment_id"): integrity.CASCADE,
        ("prescriptions", "appointment_id"): integrity.CASCADE,
        ("medical_records", "appointment_id"): integrity.SET_NULL,
    }


# ============================================================================
# INSERT CONSTRAINTS
# ============================================================================


@pytest.mark.asyncio
async def test_link_to_missing_specialty_is_foreign_key_violation(db):
    with pytest.raises(ForeignKeyViolation):
        await records.insert(db, DoctorSpecialty(doctor_id=1, specialty_id=99))
    await db.rollback()
    assert await count(db, DoctorSpecialty) == 6


@pytest.mark.asyncio
async def test_duplicate_specialty_name_is_unique_violation(db):
    with pytest.raises(UniqueConstraintViolation):
        await records.insert(db, Specialty(name="Cardiology", description="again"))
    await db.rollback()
    assert await count(db, Specialty, Specialty.name == "Cardiology") == 1


@pytest.mark.asyncio
async def test_duplicate_doctor_email_is_unique_violation(db):
    with pytest.raises(UniqueConstraintViolation):
        await records.insert(db, Doctor(
            clinic_id=2, first_name="Chika", last_name="Obi", email="cokafor@hospitalgroup.com",
        ))


@pytest.mark.asyncio
async def test_duplicate_patient_email_is_unique_violation(db):
    with pytest.raises(UniqueConstraintViolation):
        await records.insert(db, Patient(first_name="Ngozi", last_name="Okeke", email="ngozi.eze@gmail.com"))


@pytest.mark.asyncio
async def test_doctor_for_missing_clinic_is_foreign_key_violation(db):
    with pytest.raises(ForeignKeyViolation):
        await records.insert(db, Doctor(clinic_id=42, first_name="Tunde", last_name="Bakare"))


@pytest.mark.asyncio
async def test_missing_required_column_is_not_null_violation(session):
    with pytest.raises(NotNullViolation):
        await records.insert(session, Patient(first_name=None, last_name="Nobody"))


@pytest.mark.asyncio
async def test_insert_returns_row_with_server_defaults(session):
    clinic = await records.insert(session, Clinic(name="Enugu Clinic", address="1 Ogui Rd, Enugu"))
    service = await records.insert(session, Service(clinic_id=clinic.id, name="X-Ray", price=Decimal("9500.00")))
    await session.commit()

    assert clinic.id is not None
    assert clinic.created_at is not None
    assert service.duration_minutes == 30


@pytest.mark.asyncio
async def test_payments_may_exceed_service_price(db):
    # no hay regla que ate los pagos al precio del servicio
    await records.insert(db, Payment(appointment_id=5, amount=Decimal("99999.99"), method=PaymentMethod.Card))
    await db.commit()
    assert await count(db, Payment, Payment.appointment_id == 5) == 2


@pytest.mark.asyncio
async def test_double_booking_is_allowed_but_logged(db, caplog):
    caplog.set_level("WARNING", logger="hospital_network.services.records")
    ap = await records.insert(db, Appointment(
        patient_id=4, doctor_id=1, clinic_id=1, service_id=1,
        appointment_date=datetime(2025, 9, 25, 10, 0),
    ))
    await db.commit()

    assert ap.id == 6
    assert "already has appointment 1" in caplog.text


# ============================================================================
# KEY CHANGES
# ============================================================================


@pytest.mark.asyncio
async def test_change_clinic_key_propagates_to_children(db):
    await records.change_key(db, Clinic, 3, 30)
    await db.commit()

    assert await count(db, Clinic, Clinic.id == 3) == 0
    assert (await records.get(db, Clinic, 30)).name == "Ibadan General Clinic"
    assert await scalars(db, Doctor.id, Doctor.clinic_id == 30) == [5]
    assert await scalars(db, Service.id, Service.clinic_id == 30) == [5, 6]
    assert await scalars(db, Appointment.id, Appointment.clinic_id == 30) == [5]


@pytest.mark.asyncio
async def test_change_service_key_propagates_to_appointments(db):
    await records.change_key(db, Service, 1, 100)
    await db.commit()

    assert await scalars(db, Appointment.service_id, Appointment.id == 1) == [100]


@pytest.mark.asyncio
async def test_change_key_to_taken_id_is_unique_violation(db):
    with pytest.raises(UniqueConstraintViolation):
        await records.change_key(db, Patient, 1, 2)


@pytest.mark.asyncio
async def test_change_key_of_missing_row(db):
    with pytest.raises(RecordNotFound):
        await records.change_key(db, Doctor, 77, 78)


@pytest.mark.asyncio
async def test_change_key_rejects_composite_keys(db):
    with pytest.raises(ValueError):
        await records.change_key(db, DoctorSpecialty, (1, 1), (1, 2))


@pytest.mark.asyncio
async def test_update_appointment_status_is_an_external_write(db):
    ap = await records.update_appointment(db, 1, status=AppointmentStatus.Cancelled, notes="Patient travelled")
    await db.commit()

    assert ap.status.value == "Cancelled"
    assert ap.notes == "Patient travelled"
    assert (await records.get(db, MedicalRecord, 1)).record_date == date(2025, 9, 25)
