from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.prescription import Prescription
from hospital_network.schemas.prescription import PrescriptionCreate, PrescriptionOut
from hospital_network.services import records

router = APIRouter(prefix="/prescriptions", tags=["prescriptions"])

@router.post("/", response_model=PrescriptionOut, status_code=201)
async def create_prescription(payload: PrescriptionCreate, db: AsyncSession = Depends(get_db)):
    rx = await records.insert(db, Prescription(**payload.model_dump()))
    await db.commit()
    return rx

@router.get("/", response_model=List[PrescriptionOut])
async def list_prescriptions(
    patient_id: Optional[int] = None,
    doctor_id: Optional[int] = None,
    appointment_id: Optional[int] = None,
    page: Page = Depends(),
    db: AsyncSession = Depends(get_db),
):
    q = select(Prescription).order_by(Prescription.created_at.desc(), Prescription.id.desc())
    if patient_id:
        q = q.where(Prescription.patient_id == patient_id)
    if doctor_id:
        q = q.where(Prescription.doctor_id == doctor_id)
    if appointment_id:
        q = q.where(Prescription.appointment_id == appointment_id)
    return (await db.execute(page.apply(q))).scalars().all()

@router.get("/{id}", response_model=PrescriptionOut)
async def get_prescription(id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Prescription, id, "Receta no encontrada")

@router.delete("/{id}", status_code=204)
async def delete_prescription(id: int, db: AsyncSession = Depends(get_db)):
    await delete_and_commit(db, Prescription, id)
