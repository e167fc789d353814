from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class PrescriptionCreate(BaseModel):
    appointment_id: int
    patient_id: int
    doctor_id: int
    medication: str = Field(..., max_length=200)
    dosage: str = Field(..., max_length=100)
    duration_days: int
    notes: Optional[str] = None

class PrescriptionOut(PrescriptionCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime
