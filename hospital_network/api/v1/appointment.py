from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.appointment import Appointment, AppointmentStatus
from hospital_network.models.payment import Payment
from hospital_network.schemas.appointment import AppointmentCreate, AppointmentOut, AppointmentUpdate
from hospital_network.schemas.payment import PaymentOut, PaymentTotal
from hospital_network.services import queries, records

router = APIRouter(prefix="/appointments", tags=["appointments"])

# ---------- create ----------
@router.post("/", response_model=AppointmentOut, status_code=201)
async def create_appointment(payload: AppointmentCreate, db: AsyncSession = Depends(get_db)):
    # no se controla superposición de horarios del doctor (queda en /reports/double-bookings)
    ap = await records.insert(db, Appointment(**payload.model_dump()))
    await db.commit()
    return ap

# ---------- list ----------
@router.get("/", response_model=list[AppointmentOut])
async def list_appointments(
    clinic_id: int | None = Query(None),
    doctor_id: int | None = Query(None),
    patient_id: int | None = Query(None),
    status: AppointmentStatus | None = Query(None),
    date_from: datetime | None = Query(None),
    date_to: datetime | None = Query(None),
    page: Page = Depends(),
    db: AsyncSession = Depends(get_db),
):
    q = select(Appointment)
    if clinic_id:
        q = q.where(Appointment.clinic_id == clinic_id)
    if doctor_id:
        q = q.where(Appointment.doctor_id == doctor_id)
    if patient_id:
        q = q.where(Appointment.patient_id == patient_id)
    if status:
        q = q.where(Appointment.status == status)
    if date_from:
        q = q.where(Appointment.appointment_date >= date_from)
    if date_to:
        q = q.where(Appointment.appointment_date < date_to)
    res = await db.execute(page.apply(q.order_by(Appointment.appointment_date, Appointment.id)))
    return res.scalars().all()

# ---------- get ----------
@router.get("/{id}", response_model=AppointmentOut)
async def get_appointment(id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Appointment, id, "Turno no encontrado")

# ---------- update ----------
@router.patch("/{id}", response_model=AppointmentOut)
async def update_appointment(id: int, patch: AppointmentUpdate, db: AsyncSession = Depends(get_db)):
    ap = await records.update_appointment(db, id, status=patch.status, notes=patch.notes)
    await db.commit()
    return ap

# ---------- pagos ----------
@router.get("/{id}/payments", response_model=list[PaymentOut])
async def appointment_payments(id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Appointment, id, "Turno no encontrado")
    res = await db.execute(select(Payment).where(Payment.appointment_id == id).order_by(Payment.id))
    return res.scalars().all()

@router.get("/{id}/payments/total", response_model=PaymentTotal)
async def appointment_total_paid(id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Appointment, id, "Turno no encontrado")
    return await queries.total_paid(db, id)

# ---------- delete ----------
@router.delete("/{id}", status_code=204)
async def delete_appointment(id: int, db: AsyncSession = Depends(get_db)):
    # pagos y recetas se borran; la historia clínica queda con appointment_id NULL
    await delete_and_commit(db, Appointment, id)
