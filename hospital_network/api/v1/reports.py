from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import get_db
from hospital_network.schemas.appointment import DoubleBooking
from hospital_network.schemas.payment import PaymentBalance
from hospital_network.services import queries

# huecos del esquema: se informan, no se bloquean
router = APIRouter(prefix="/reports", tags=["reports"])

@router.get("/double-bookings", response_model=list[DoubleBooking])
async def double_bookings(clinic_id: int | None = Query(None), db: AsyncSession = Depends(get_db)):
    return await queries.double_bookings(db, clinic_id=clinic_id)

@router.get("/payment-balances", response_model=list[PaymentBalance])
async def payment_balances(
    clinic_id: int | None = Query(None),
    only_mismatched: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    return await queries.payment_balances(db, clinic_id=clinic_id, only_mismatched=only_mismatched)
