"""SQLAlchemy unit of work.

Usage:

    async with SqlUnitOfWork(session) as uow:
        products = uow.get_repository(Product, UUID)
        await products.add(product)
        await uow.save_changes()

One unit of work owns one AsyncSession for one logical operation (one
inbound request) and must not be shared between concurrent callers.
Overlapping store calls from two coroutines raise ConcurrentUsageError
instead of interleaving on the session.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from src.domain.errors import ConcurrentUsageError, InvalidArgumentError, TransactionStateError
from src.domain.repositories.unit_of_work import TransactionState, UnitOfWork
from src.infrastructure.persistence.models.base import utcnow
from src.infrastructure.persistence.repositories.generic import SqlGenericRepository
from src.infrastructure.persistence.repositories.raw import (
    run_non_query_procedure,
    run_procedure,
    run_statement,
)
from src.infrastructure.persistence.repositories.registry import (
    RepositoryRegistry,
    repository_registry,
)
from src.infrastructure.persistence.repositories.sorting import SortRegistry, sort_registry

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity")
TKey = TypeVar("TKey")


def _check_key_type(entity_type: type, key_type: type | None) -> None:
    if key_type is None:
        return
    column = inspect(entity_type).primary_key[0]
    try:
        expected = column.type.python_type
    except NotImplementedError:
        return
    if not issubclass(key_type, expected):
        raise InvalidArgumentError(
            f"{entity_type.__name__} is keyed by {expected.__name__}, not {key_type.__name__}"
        )


class SqlUnitOfWork(UnitOfWork):
    def __init__(
        self,
        session: AsyncSession,
        *,
        repositories: RepositoryRegistry | None = None,
        sorts: SortRegistry | None = None,
        clock: Callable[[], datetime] = utcnow,
        actor: str | None = None,
    ) -> None:
        self._session = session
        self._registry = repositories if repositories is not None else repository_registry
        self._sorts = sorts if sorts is not None else sort_registry
        self._clock = clock
        self._actor = actor
        self._repositories: dict[type, SqlGenericRepository[Any, Any]] = {}
        self._repositories_lock = threading.Lock()
        self._transaction: AsyncSessionTransaction | None = None
        self._in_flight: str | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def transaction_state(self) -> TransactionState:
        return TransactionState.NONE if self._transaction is None else TransactionState.OPEN

    # --- repositories ---

    def get_repository(
        self, entity_type: type[TEntity], key_type: type[TKey] | None = None
    ) -> SqlGenericRepository[Any, Any]:
        _check_key_type(entity_type, key_type)
        repository = self._repositories.get(entity_type)
        if repository is not None:
            return repository
        with self._repositories_lock:
            repository = self._repositories.get(entity_type)
            if repository is None:
                repository_type = self._registry.repository_type_for(entity_type)
                repository = repository_type(
                    self._session,
                    entity_type,
                    sorts=self._sorts,
                    clock=self._clock,
                    actor=self._actor,
                )
                self._repositories[entity_type] = repository
                logger.debug(
                    "Created %s for %s", repository_type.__name__, entity_type.__name__
                )
        return repository

    # --- store calls ---

    @asynccontextmanager
    async def _exclusive(self, operation: str) -> AsyncIterator[None]:
        if self._in_flight is not None:
            raise ConcurrentUsageError(
                f"{operation} called while {self._in_flight} is still running on this unit of work"
            )
        self._in_flight = operation
        try:
            yield
        finally:
            self._in_flight = None

    async def save_changes(self) -> int:
        async with self._exclusive("save_changes"):
            session = self._session
            affected = (
                len(session.new)
                + len(session.deleted)
                + sum(1 for obj in session.dirty if session.is_modified(obj))
            )
            if self._transaction is not None:
                await session.flush()
            else:
                # Each implicit save is its own unit: a failed commit is undone
                # so the session stays usable.
                try:
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
            logger.debug(
                "Saved %d change(s)%s",
                affected,
                " inside open transaction" if self._transaction is not None else "",
            )
            return affected

    async def begin_transaction(self) -> AsyncSessionTransaction:
        async with self._exclusive("begin_transaction"):
            if self._transaction is not None:
                raise TransactionStateError("A transaction is already open on this unit of work")
            # Reads may already have autobegun the session transaction; adopt it.
            current = self._session.get_transaction()
            if current is not None:
                self._transaction = current
            else:
                self._transaction = await self._session.begin()
            logger.debug("Transaction begun")
            return self._transaction

    async def commit_transaction(self) -> None:
        if self._transaction is None:
            return
        async with self._exclusive("commit_transaction"):
            await self._transaction.commit()
            self._transaction = None
            logger.debug("Transaction committed")

    async def rollback_transaction(self) -> None:
        if self._transaction is None:
            return
        async with self._exclusive("rollback_transaction"):
            try:
                await self._transaction.rollback()
            finally:
                self._transaction = None
            logger.debug("Transaction rolled back")

    async def execute_sql_raw(self, sql: str, *params: Any) -> int:
        async with self._exclusive("execute_sql_raw"):
            return await run_statement(self._session, sql, params)

    async def execute_stored_procedure(
        self, procedure_name: str, *params: Any, result_type: type | None = None
    ) -> Sequence[Any]:
        async with self._exclusive("execute_stored_procedure"):
            return await run_procedure(self._session, procedure_name, params, result_type)

    async def execute_non_query_stored_procedure(self, procedure_name: str, *params: Any) -> int:
        async with self._exclusive("execute_non_query_stored_procedure"):
            return await run_non_query_procedure(self._session, procedure_name, params)

    async def close(self) -> None:
        if self._transaction is not None:
            logger.warning("Unit of work closed with an open transaction; rolling back")
            await self.rollback_transaction()
        self._repositories.clear()
        await self._session.close()

    async def __aenter__(self) -> SqlUnitOfWork:
        return self
