from sqlalchemy import ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class DoctorSpecialty(Base):
    __tablename__ = "doctor_specialties"
    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("doctors.id", ondelete="CASCADE", onupdate="CASCADE"), primary_key=True
    )
    specialty_id: Mapped[int] = mapped_column(
        ForeignKey("specialties.id", ondelete="CASCADE", onupdate="CASCADE"), primary_key=True
    )

    __table_args__ = (
        # el PK compuesto ya cubre doctor_id como prefijo
        Index("ix_doctor_specialty_specialty", "specialty_id"),
        MYSQL_TABLE_OPTS,
    )
