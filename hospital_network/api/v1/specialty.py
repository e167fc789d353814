from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.specialty import Specialty
from hospital_network.schemas.doctor import SpecialistOut
from hospital_network.schemas.specialty import SpecialtyCreate, SpecialtyOut
from hospital_network.services import queries, records

router = APIRouter(prefix="/specialties", tags=["specialties"])

@router.post("/", response_model=SpecialtyOut, status_code=201)
async def create_specialty(payload: SpecialtyCreate, db: AsyncSession = Depends(get_db)):
    sp = await records.insert(db, Specialty(**payload.model_dump()))
    await db.commit()
    return sp

@router.get("/", response_model=list[SpecialtyOut])
async def list_specialties(page: Page = Depends(), db: AsyncSession = Depends(get_db)):
    res = await db.execute(page.apply(select(Specialty).order_by(Specialty.name)))
    return res.scalars().all()

# médicos de esa especialidad en todas las clínicas (derivaciones entre sucursales)
@router.get("/{id}/doctors", response_model=list[SpecialistOut])
async def specialty_doctors(id: int, db: AsyncSession = Depends(get_db)):
    sp = await get_or_404(db, Specialty, id, "Especialidad no encontrada")
    return await queries.doctors_with_specialty(db, sp.name)

@router.delete("/{id}", status_code=204)
async def delete_specialty(id: int, db: AsyncSession = Depends(get_db)):
    await delete_and_commit(db, Specialty, id)
