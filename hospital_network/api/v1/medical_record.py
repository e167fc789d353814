from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.medical_record import MedicalRecord
from hospital_network.schemas.medical_record import MedicalRecordCreate, MedicalRecordOut
from hospital_network.services import records

router = APIRouter(prefix="/medical-records", tags=["medical-records"])

@router.post("/", response_model=MedicalRecordOut, status_code=201)
async def create_medical_record(payload: MedicalRecordCreate, db: AsyncSession = Depends(get_db)):
    rec = await records.insert(db, MedicalRecord(**payload.model_dump()))
    await db.commit()
    return rec

@router.get("/{id}", response_model=MedicalRecordOut)
async def get_medical_record(id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, MedicalRecord, id, "Registro no encontrado")

@router.delete("/{id}", status_code=204)
async def delete_medical_record(id: int, db: AsyncSession = Depends(get_db)):
    await delete_and_commit(db, MedicalRecord, id)
