from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.api.deps import Page, get_db
from hospital_network.api.v1._helpers import delete_and_commit, get_or_404
from hospital_network.models.payment import Payment
from hospital_network.schemas.payment import PaymentCreate, PaymentOut
from hospital_network.services import records

router = APIRouter(prefix="/payments", tags=["payments"])

@router.post("/", response_model=PaymentOut, status_code=201)
async def create_payment(payload: PaymentCreate, db: AsyncSession = Depends(get_db)):
    # se aceptan pagos parciales; no se compara contra el precio del servicio
    p = await records.insert(db, Payment(**payload.model_dump(exclude_none=True)))
    await db.commit()
    return p

@router.get("/", response_model=list[PaymentOut])
async def list_payments(
    appointment_id: int | None = Query(None),
    page: Page = Depends(),
    db: AsyncSession = Depends(get_db),
):
    q = select(Payment).order_by(Payment.id)
    if appointment_id:
        q = q.where(Payment.appointment_id == appointment_id)
    return (await db.execute(page.apply(q))).scalars().all()

@router.get("/{id}", response_model=PaymentOut)
async def get_payment(id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Payment, id, "Pago no encontrado")

@router.delete("/{id}", status_code=204)
async def delete_payment(id: int, db: AsyncSession = Depends(get_db)):
    await delete_and_commit(db, Payment, id)
