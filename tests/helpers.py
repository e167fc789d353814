from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def count(session: AsyncSession, model, *where) -> int:
    q = select(func.count()).select_from(model)
    if where:
        q = q.where(*where)
    return (await session.execute(q)).scalar_one()


async def scalars(session: AsyncSession, column, *where, order_by=None) -> list:
    q = select(column)
    if where:
        q = q.where(*where)
    q = q.order_by(order_by if order_by is not None else column)
    return list((await session.execute(q)).scalars().all())
