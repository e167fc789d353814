"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite database (aiosqlite, foreign keys on)
with the full schema; ``seeded`` also loads the sample rows.
"""

import os

# antes de importar hospital_network: el engine del módulo db se crea al importar
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "DEBUG"

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from hospital_network.core.db import make_engine, make_sessionmaker
from hospital_network.services.sample_data import create_schema, load_sample_data


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database with every table created."""
    eng = make_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return make_sessionmaker(engine)


@pytest_asyncio.fixture
async def seeded(session_factory) -> async_sessionmaker[AsyncSession]:
    """Session factory over a database holding the sample data."""
    async with session_factory() as session:
        await load_sample_data(session)
    return session_factory


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session on an empty schema."""
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def db(seeded) -> AsyncGenerator[AsyncSession, None]:
    """Session on the sample data."""
    async with seeded() as s:
        yield s
