from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class DoctorCreate(BaseModel):
    clinic_id: int
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None

class DoctorOut(DoctorCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime
    specialties: List[int] = []

    @staticmethod
    def from_model(d) -> "DoctorOut":
        """Arma la salida con los ids de especialidad (la relación tiene que venir cargada)."""
        return DoctorOut(
            id=d.id,
            clinic_id=d.clinic_id,
            first_name=d.first_name,
            last_name=d.last_name,
            phone=d.phone,
            email=d.email,
            created_at=d.created_at,
            specialties=[s.id for s in d.specialties],
        )

class SpecialistOut(BaseModel):
    doctor_id: int
    first_name: str
    last_name: str
    clinic_id: int
    clinic_name: str
