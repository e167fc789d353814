from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class Specialty(Base):
    __tablename__ = "specialties"
    __table_args__ = MYSQL_TABLE_OPTS

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True)   # "Cardiology", "Dermatology", ...
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
