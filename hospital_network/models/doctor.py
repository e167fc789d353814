from datetime import datetime
from sqlalchemy import String, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class Doctor(Base):
    __tablename__ = "doctors"
    __table_args__ = MYSQL_TABLE_OPTS

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # clínica principal donde atiende
    clinic_id: Mapped[int] = mapped_column(
        ForeignKey("clinics.id", ondelete="CASCADE", onupdate="CASCADE"), index=True
    )
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), unique=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.current_timestamp())

    # sólo lectura; los vínculos se escriben como filas de DoctorSpecialty
    specialties = relationship("Specialty", secondary="doctor_specialties", viewonly=True,
                               order_by="Specialty.id")
