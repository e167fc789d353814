from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.core.errors import RecordNotFound
from hospital_network.services import records


async def get_or_404(db: AsyncSession, model, id, detail: str):
    # el 404 lo arma main.py, igual que para los RecordNotFound del store
    obj = await db.get(model, id)
    if obj is None:
        raise RecordNotFound(model.__tablename__, id, detail)
    return obj


async def delete_and_commit(db: AsyncSession, model, id) -> dict[str, int]:
    # RecordNotFound / RestrictedDeletion los traduce main.py
    plan = await records.delete(db, model, id)
    await db.commit()
    return plan.deleted_counts
