from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

class MedicalRecordCreate(BaseModel):
    patient_id: int
    appointment_id: Optional[int] = None
    record_date: date
    notes: str

class MedicalRecordOut(MedicalRecordCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime
