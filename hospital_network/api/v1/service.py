from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.service import Service
from hospital_network.schemas.clinic import KeyChange
from hospital_network.schemas.service import ServiceCreate, ServiceOut
from hospital_network.services import records

router = APIRouter(prefix="/services", tags=["services"])

@router.post("/", response_model=ServiceOut, status_code=201)
async def create_service(payload: ServiceCreate, db: AsyncSession = Depends(get_db)):
    s = await records.insert(db, Service(**payload.model_dump()))
    await db.commit()
    return s

@router.get("/", response_model=list[ServiceOut])
async def list_services(
    clinic_id: int | None = Query(None),
    page: Page = Depends(),
    db: AsyncSession = Depends(get_db),
):
    q = select(Service).order_by(Service.id)
    if clinic_id:
        q = q.where(Service.clinic_id == clinic_id)
    return (await db.execute(page.apply(q))).scalars().all()

@router.get("/{id}", response_model=ServiceOut)
async def get_service(id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Service, id, "Servicio no encontrado")

@router.put("/{id}/key", response_model=ServiceOut)
async def change_service_key(id: int, payload: KeyChange, db: AsyncSession = Depends(get_db)):
    await records.change_key(db, Service, id, payload.new_id)
    await db.commit()
    return await get_or_404(db, Service, payload.new_id, "Servicio no encontrado")

# un servicio ya usado en turnos no se borra (409)
@router.delete("/{id}", status_code=204)
async def delete_service(id: int, db: AsyncSession = Depends(get_db)):
    await delete_and_commit(db, Service, id)
