"""Write operations of the records store.

All functions work inside the caller's session and never commit; a raised
``ConstraintViolation`` means the caller should roll back.
"""
import logging
from typing import Any, TypeVar

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.core.errors import RecordNotFound, integrity_errors
from hospital_network.models.appointment import Appointment, AppointmentStatus
from hospital_network.services.integrity import DeletePlan, apply_plan, plan_delete

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def _key_tuple(model, key) -> tuple:
    if isinstance(key, tuple):
        return key
    if isinstance(key, dict):
        return tuple(key[c.name] for c in model.__table__.primary_key.columns)
    return (key,)


async def get(session: AsyncSession, model: type[ModelT], key) -> ModelT:
    obj = await session.get(model, key)
    if obj is None:
        raise RecordNotFound(model.__tablename__, key)
    return obj


async def insert(session: AsyncSession, obj: ModelT) -> ModelT:
    """Add and flush one row; FK/unique/not-null failures surface as ConstraintViolation."""
    if isinstance(obj, Appointment):
        await _warn_double_booking(session, obj)
    session.add(obj)
    with integrity_errors("insert"):
        await session.flush()
    await session.refresh(obj)
    return obj


async def delete(session: AsyncSession, model, key) -> DeletePlan:
    """Delete one row applying the cascade / restrict / set-null rules of its table."""
    plan = await plan_delete(session, model.__table__, _key_tuple(model, key))
    return await apply_plan(session, plan)


async def change_key(session: AsyncSession, model, old_id: Any, new_id: Any) -> None:
    """Change a single-column primary key; children follow via ON UPDATE CASCADE."""
    table = model.__table__
    pk_cols = list(table.primary_key.columns)
    if len(pk_cols) != 1:
        raise ValueError(f"{table.name} has a composite primary key")
    pk = pk_cols[0]

    exists = (await session.execute(select(pk).where(pk == old_id))).scalar_one_or_none()
    if exists is None:
        raise RecordNotFound(table.name, old_id)

    with integrity_errors("update"):
        await session.execute(update(table).where(pk == old_id).values({pk.name: new_id}))
    session.expire_all()
    logger.info("Changed %s key %r -> %r", table.name, old_id, new_id)


async def update_appointment(session: AsyncSession, appointment_id: int,
                             status: AppointmentStatus | None = None,
                             notes: str | None = None) -> Appointment:
    # no hay transiciones automáticas: cualquier cambio de estado es una escritura externa
    ap = await get(session, Appointment, appointment_id)
    if status is not None:
        ap.status = status
    if notes is not None:
        ap.notes = notes
    with integrity_errors("update"):
        await session.flush()
    await session.refresh(ap)
    return ap


async def _warn_double_booking(session: AsyncSession, ap: Appointment) -> None:
    # el esquema no impide turnos superpuestos del mismo doctor; sólo se avisa
    if ap.doctor_id is None or ap.appointment_date is None:
        return
    if ap.status == AppointmentStatus.Cancelled:
        return
    q = select(Appointment.id).where(
        Appointment.doctor_id == ap.doctor_id,
        Appointment.appointment_date == ap.appointment_date,
        or_(Appointment.status.is_(None), Appointment.status != AppointmentStatus.Cancelled),
    )
    clash = (await session.execute(q.limit(1))).scalar_one_or_none()
    if clash is not None:
        logger.warning(
            "Doctor %s already has appointment %s at %s; booking anyway",
            ap.doctor_id, clash, ap.appointment_date.isoformat(),
        )
