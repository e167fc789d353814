from datetime import date, datetime
from sqlalchemy import Text, Date, TIMESTAMP, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column
from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class MedicalRecord(Base):
    """Historia clínica de largo plazo del paciente."""
    __tablename__ = "medical_records"
    __table_args__ = MYSQL_TABLE_OPTS

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    patient_id: Mapped[int] = mapped_column(
        ForeignKey("patients.id", ondelete="CASCADE", onupdate="CASCADE"), index=True
    )
    # si se borra el turno, la entrada de historia queda con appointment_id NULL
    appointment_id: Mapped[int | None] = mapped_column(
        ForeignKey("appointments.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
        index=True,
    )
    record_date: Mapped[date] = mapped_column(Date)
    notes: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.current_timestamp())
