from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.patient import Patient
from hospital_network.schemas.medical_record import MedicalRecordOut
from hospital_network.schemas.patient import PatientCreate, PatientOut
from hospital_network.services import queries, records

router = APIRouter(prefix="/patients", tags=["patients"])

@router.post("/", response_model=PatientOut, status_code=201)
async def create_patient(payload: PatientCreate, db: AsyncSession = Depends(get_db)):
    p = await records.insert(db, Patient(**payload.model_dump()))
    await db.commit()
    return p

@router.get("/", response_model=list[PatientOut])
async def list_patients(page: Page = Depends(), db: AsyncSession = Depends(get_db)):
    res = await db.execute(page.apply(select(Patient).order_by(Patient.last_name, Patient.first_name)))
    return res.scalars().all()

@router.get("/{id}", response_model=PatientOut)
async def get_patient(id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Patient, id, "Paciente no encontrado")

# historia clínica ordenada por fecha
@router.get("/{id}/medical-records", response_model=list[MedicalRecordOut])
async def patient_medical_records(id: int, db: AsyncSession = Depends(get_db)):
    return await queries.patient_history(db, id)

@router.delete("/{id}", status_code=204)
async def delete_patient(id: int, db: AsyncSession = Depends(get_db)):
    await delete_and_commit(db, Patient, id)
