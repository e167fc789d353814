from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from hospital_network.models.appointment import AppointmentStatus

class AppointmentCreate(BaseModel):
    patient_id: int
    doctor_id: int
    clinic_id: int
    service_id: int
    appointment_date: datetime
    status: AppointmentStatus = AppointmentStatus.Scheduled
    notes: Optional[str] = None

class AppointmentUpdate(BaseModel):
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

class AppointmentOut(AppointmentCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
    status: Optional[AppointmentStatus] = None
    created_at: datetime

class UpcomingAppointment(BaseModel):
    """Una fila del listado de turnos de una clínica."""
    appointment_id: int
    patient_first_name: str
    patient_last_name: str
    doctor_first_name: str
    service_name: str
    appointment_date: datetime

class DoubleBooking(BaseModel):
    doctor_id: int
    appointment_date: datetime
    appointment_ids: List[int]
