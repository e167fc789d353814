import enum
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Enum, ForeignKey, TIMESTAMP, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column
from hospital_network.core.db import Base, MYSQL_TABLE_OPTS

class PaymentMethod(str, enum.Enum):
    Cash = "Cash"
    Card = "Card"
    Transfer = "Transfer"
    Insurance = "Insurance"

class Payment(Base):
    """Pago (parcial o total) de un turno; se permiten varios por turno."""
    __tablename__ = "payments"
    __table_args__ = MYSQL_TABLE_OPTS

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    appointment_id: Mapped[int] = mapped_column(
        ForeignKey("appointments.id", ondelete="CASCADE", onupdate="CASCADE"), index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    payment_date: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.current_timestamp())
    method: Mapped[PaymentMethod] = mapped_column(Enum(PaymentMethod, name="payment_method"))
