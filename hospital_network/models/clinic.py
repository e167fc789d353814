from datetime import datetime
from sqlalchemy import String, Text, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column
from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class Clinic(Base):
    """Sucursal del grupo hospitalario."""
    __tablename__ = "clinics"
    __table_args__ = MYSQL_TABLE_OPTS

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150))
    address: Mapped[str] = mapped_column(Text)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.current_timestamp())
