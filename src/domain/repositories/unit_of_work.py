"""Unit of work interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from types import TracebackType
from typing import Any, TypeVar

from .base import Repository

TEntity = TypeVar("TEntity")
TKey = TypeVar("TKey")


class TransactionState(str, Enum):
    NONE = "none"
    OPEN = "open"


class UnitOfWork(ABC):
    """Single point of transactional coordination for one logical operation.

    Owns one session and hands out exactly one repository per entity type
    for its lifetime.  Transaction lifecycle:

        NONE --begin--> OPEN --commit|rollback--> NONE

    Beginning while OPEN is an error.  Leaving the ``async with`` block (or
    calling close()) rolls back a transaction that is still open.
    """

    @abstractmethod
    def get_repository(
        self, entity_type: type[TEntity], key_type: type[TKey] | None = None
    ) -> Repository[TEntity, TKey]:
        """Return the cached repository for entity_type, creating it once."""

    @property
    @abstractmethod
    def transaction_state(self) -> TransactionState:
        """Whether an explicit transaction is currently open."""

    @abstractmethod
    async def save_changes(self) -> int:
        """Flush all staged writes atomically; return the affected row count."""

    @abstractmethod
    async def begin_transaction(self) -> Any:
        """Open an explicit transaction spanning several save_changes calls."""

    @abstractmethod
    async def commit_transaction(self) -> None:
        """Commit the open transaction; no-op when none is open."""

    @abstractmethod
    async def rollback_transaction(self) -> None:
        """Roll back the open transaction; no-op when none is open."""

    @abstractmethod
    async def execute_sql_raw(self, sql: str, *params: Any) -> int:
        """Execute a raw statement on the shared connection; return row count."""

    @abstractmethod
    async def execute_stored_procedure(
        self, procedure_name: str, *params: Any, result_type: type | None = None
    ) -> Sequence[Any]:
        """Run a row-returning procedure on the shared connection."""

    @abstractmethod
    async def execute_non_query_stored_procedure(self, procedure_name: str, *params: Any) -> int:
        """Run a procedure for its side effects; return row count."""

    @abstractmethod
    async def close(self) -> None:
        """Release the session, rolling back any still-open transaction."""

    @property
    def has_active_transaction(self) -> bool:
        return self.transaction_state is TransactionState.OPEN

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
