from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from hospital_network.models.payment import PaymentMethod

class PaymentCreate(BaseModel):
    appointment_id: int
    amount: Decimal = Field(..., max_digits=10, decimal_places=2)
    method: PaymentMethod
    payment_date: Optional[datetime] = None   # si no viene, la pone la base

class PaymentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    appointment_id: int
    amount: Decimal
    method: PaymentMethod
    payment_date: datetime

class PaymentTotal(BaseModel):
    appointment_id: int
    total: Decimal
    payments: int

BalanceState = Literal["paid", "underpaid", "overpaid"]

class PaymentBalance(BaseModel):
    appointment_id: int
    clinic_id: int
    service_price: Decimal
    total_paid: Decimal
    balance: Decimal          # price - paid; > 0 falta pagar, < 0 se pagó de más
    state: BalanceState
