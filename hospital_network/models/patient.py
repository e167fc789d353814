from datetime import date, datetime
from sqlalchemy import String, Date, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column
from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class Patient(Base):
    """Paciente; puede atenderse en cualquier clínica del grupo."""
    __tablename__ = "patients"
    __table_args__ = MYSQL_TABLE_OPTS

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), unique=True, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.current_timestamp())
