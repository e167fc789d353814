from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class ClinicCreate(BaseModel):
    name: str = Field(..., max_length=150)
    address: str
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None

class ClinicOut(ClinicCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime

class KeyChange(BaseModel):
    new_id: int = Field(..., ge=1)
