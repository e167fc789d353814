import enum
from datetime import datetime
from sqlalchemy import String, Text, Enum, ForeignKey, DateTime, TIMESTAMP, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class AppointmentStatus(str, enum.Enum):
    Scheduled = "Scheduled"
    Completed = "Completed"
    Cancelled = "Cancelled"

class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    patient_id: Mapped[int] = mapped_column(
        ForeignKey("patients.id", ondelete="CASCADE", onupdate="CASCADE"), index=True
    )
    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("doctors.id", ondelete="CASCADE", onupdate="CASCADE"), index=True
    )
    # clínica donde se da el turno (puede no ser la principal del doctor)
    clinic_id: Mapped[int] = mapped_column(
        ForeignKey("clinics.id", ondelete="CASCADE", onupdate="CASCADE"), index=True
    )
    # un servicio usado no se puede borrar
    service_id: Mapped[int] = mapped_column(
        ForeignKey("services.id", name="fk_appointment_service", ondelete="RESTRICT", onupdate="CASCADE"),
        index=True,
        comment="Service booked for this appointment (e.g., consultation, vaccination)",
    )

    appointment_date: Mapped[datetime] = mapped_column(DateTime(timezone=False))
    status: Mapped[AppointmentStatus | None] = mapped_column(
        Enum(AppointmentStatus, name="appointment_status"),
        default=AppointmentStatus.Scheduled,
        server_default=AppointmentStatus.Scheduled.value,
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.current_timestamp())

    __table_args__ = (
        Index("ix_appt_clinic_date", "clinic_id", "appointment_date"),
        Index("ix_appt_doctor_date", "doctor_id", "appointment_date"),
        MYSQL_TABLE_OPTS,
    )
