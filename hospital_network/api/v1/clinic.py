from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.clinic import Clinic
from hospital_network.models.service import Service
from hospital_network.schemas.appointment import UpcomingAppointment
from hospital_network.schemas.clinic import ClinicCreate, ClinicOut, KeyChange
from hospital_network.schemas.service import ServiceOut
from hospital_network.services import queries, records

router = APIRouter(prefix="/clinics", tags=["clinics"])

# ---------- create ----------
@router.post("/", response_model=ClinicOut, status_code=201)
async def create_clinic(payload: ClinicCreate, db: AsyncSession = Depends(get_db)):
    clinic = await records.insert(db, Clinic(**payload.model_dump()))
    await db.commit()
    return clinic

# ---------- list ----------
@router.get("/", response_model=list[ClinicOut])
async def list_clinics(page: Page = Depends(), db: AsyncSession = Depends(get_db)):
    rows = (await db.execute(page.apply(select(Clinic).order_by(Clinic.id)))).scalars().all()
    return rows

@router.get("/{id}", response_model=ClinicOut)
async def get_clinic(id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Clinic, id, "Clínica no encontrada")

# ---------- turnos de la clínica ----------
@router.get("/{id}/appointments", response_model=list[UpcomingAppointment])
async def clinic_appointments(
    id: int,
    since: datetime | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    await get_or_404(db, Clinic, id, "Clínica no encontrada")
    return await queries.upcoming_appointments(db, id, since=since)

@router.get("/{id}/services", response_model=list[ServiceOut])
async def clinic_services(id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Clinic, id, "Clínica no encontrada")
    res = await db.execute(select(Service).where(Service.clinic_id == id).order_by(Service.id))
    return res.scalars().all()

# ---------- cambio de id (se propaga a los hijos) ----------
@router.put("/{id}/key", response_model=ClinicOut)
async def change_clinic_key(id: int, payload: KeyChange, db: AsyncSession = Depends(get_db)):
    await records.change_key(db, Clinic, id, payload.new_id)
    await db.commit()
    return await get_or_404(db, Clinic, payload.new_id, "Clínica no encontrada")

# ---------- delete ----------
@router.delete("/{id}", status_code=204)
async def delete_clinic(id: int, db: AsyncSession = Depends(get_db)):
    # borra en cascada doctores, servicios y turnos
    await delete_and_commit(db, Clinic, id)
