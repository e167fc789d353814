from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class SpecialtyCreate(BaseModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = None

class SpecialtyOut(SpecialtyCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
