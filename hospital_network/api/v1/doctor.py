from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit
from hospital_network.core.errors import RecordNotFound
from hospital_network.models.doctor import Doctor
from hospital_network.models.links import DoctorSpecialty
from hospital_network.schemas.doctor import DoctorCreate, DoctorOut
from hospital_network.services import records

router = APIRouter(prefix="/doctors", tags=["doctors"])

async def _get_doctor_or_404(id: int, db: AsyncSession) -> Doctor:
    q = select(Doctor).options(selectinload(Doctor.specialties)).where(Doctor.id == id)
    d = (await db.execute(q)).scalar_one_or_none()
    if not d:
        raise RecordNotFound("doctors", id, "Doctor no encontrado")
    return d

# ---------- create ----------
@router.post("/", response_model=DoctorOut, status_code=201)
async def create_doctor(payload: DoctorCreate, db: AsyncSession = Depends(get_db)):
    d = await records.insert(db, Doctor(**payload.model_dump()))
    await db.commit()
    # recargar con relaciones
    d = await _get_doctor_or_404(d.id, db)
    return DoctorOut.from_model(d)

# --------- list ----------
@router.get("/", response_model=list[DoctorOut])
async def list_doctors(
    clinic_id: int | None = Query(None),
    page: Page = Depends(),
    db: AsyncSession = Depends(get_db),
):
    q = select(Doctor).options(selectinload(Doctor.specialties)).order_by(Doctor.id)
    if clinic_id:
        q = q.where(Doctor.clinic_id == clinic_id)
    docs = (await db.execute(page.apply(q))).scalars().unique().all()
    return [DoctorOut.from_model(d) for d in docs]

@router.get("/{id}", response_model=DoctorOut)
async def get_doctor(id: int, db: AsyncSession = Depends(get_db)):
    return DoctorOut.from_model(await _get_doctor_or_404(id, db))

# ---------- especialidades ----------
@router.post("/{id}/specialties/{specialty_id}", response_model=DoctorOut, status_code=201)
async def add_specialty(id: int, specialty_id: int, db: AsyncSession = Depends(get_db)):
    # especialidad inexistente -> ForeignKeyViolation; repetida -> UniqueConstraintViolation
    await records.insert(db, DoctorSpecialty(doctor_id=id, specialty_id=specialty_id))
    await db.commit()
    db.expire_all()
    return DoctorOut.from_model(await _get_doctor_or_404(id, db))

@router.delete("/{id}/specialties/{specialty_id}", status_code=204)
async def remove_specialty(id: int, specialty_id: int, db: AsyncSession = Depends(get_db)):
    await delete_and_commit(db, DoctorSpecialty, (id, specialty_id))

# ---------- delete ----------
@router.delete("/{id}", status_code=204)
async def delete_doctor(id: int, db: AsyncSession = Depends(get_db)):
    # con recetas emitidas -> 409
    await delete_and_commit(db, Doctor, id)
