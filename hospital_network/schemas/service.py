from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class ServiceCreate(BaseModel):
    clinic_id: int
    name: str = Field(..., max_length=150)
    description: Optional[str] = None
    duration_minutes: int = 30
    # igual que en la tabla: no se valida que sea >= 0
    price: Decimal = Field(..., max_digits=10, decimal_places=2)

class ServiceOut(ServiceCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
