"""Shared fixtures: a throwaway SQLite database per test.

A file-backed database (rather than :memory:) lets two independent
sessions see the same data, which the commit-visibility tests rely on.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

import src.infrastructure.persistence  # noqa: F401  registers mappers and repositories
from src.infrastructure.database import Base
from src.infrastructure.persistence.unit_of_work import SqlUnitOfWork


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def uow(session_factory) -> AsyncGenerator[SqlUnitOfWork, None]:
    async with SqlUnitOfWork(session_factory()) as unit_of_work:
        yield unit_of_work
