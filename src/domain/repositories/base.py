"""Generic repository interfaces.

Repository[TEntity, TKey] is the root abstraction for data access in this
domain layer.  It is split the same way callers use it: read-only services
depend on ReadRepository, writers on the full Repository.  The concrete
implementation lives in src/infrastructure/persistence/ and is handed out
by a UnitOfWork.

Design notes:
  - All store-touching methods are async; cancellation is asyncio task
    cancellation and propagates as CancelledError.
  - ``where`` arguments are boolean clauses over mapped attributes, or
    callables receiving the entity class and returning one.
  - ``include`` is a comma-separated list of relationship paths, dotted for
    nested paths ("variants,category.sub_categories").
  - Lookups that find nothing return None; delete(id) on a missing id does
    nothing.  Store failures propagate unmodified.
  - Soft-deleted rows are NOT filtered out of reads; that is left to the
    caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from src.domain.models.criteria import SearchCriteria
from src.domain.models.pagination import PaginatedResult, PaginationRequest

TEntity = TypeVar("TEntity")
TKey = TypeVar("TKey")


class ReadRepository(ABC, Generic[TEntity, TKey]):
    """Lookup, search, count and pagination for one entity type."""

    @abstractmethod
    async def get_by_id(self, id: TKey, include: str | None = None) -> TEntity | None:
        """Return the entity with the given key, or None if not found."""

    @abstractmethod
    async def first_matching(self, where: Any, include: str | None = None) -> TEntity | None:
        """Return the first entity satisfying ``where``, or None."""

    @abstractmethod
    async def get_all(self, include: str | None = None) -> list[TEntity]:
        """Return every row of the entity type."""

    @abstractmethod
    async def find_all(self, where_or_criteria: Any) -> list[TEntity]:
        """Return entities matching a predicate or a full SearchCriteria."""

    @abstractmethod
    async def get_paginated(
        self,
        request: PaginationRequest,
        where_or_criteria: Any | SearchCriteria[TEntity] | None = None,
    ) -> PaginatedResult[TEntity]:
        """Return one page plus the filtered total.

        criteria.order_by, when given, wins over request.sort_field.
        """

    @abstractmethod
    async def count(self, where: Any | None = None) -> int:
        """Count all rows, or the rows satisfying ``where``."""

    @abstractmethod
    async def exists(self, id: TKey) -> bool:
        """True when a row with the given key exists."""

    @abstractmethod
    async def exists_where(self, where: Any) -> bool:
        """True when at least one row satisfies ``where``."""


class WriteRepository(ABC, Generic[TEntity, TKey]):
    """Staged writes; nothing reaches the store until the unit of work saves."""

    @abstractmethod
    async def add(self, entity: TEntity) -> TEntity:
        """Stage an insert.  Generated keys are populated on save."""

    @abstractmethod
    async def add_range(self, entities: Iterable[TEntity]) -> list[TEntity]:
        """Stage several inserts."""

    @abstractmethod
    async def update(self, entity: TEntity) -> TEntity:
        """Stage a full-row update and return the session-bound instance."""

    @abstractmethod
    async def update_range(self, entities: Iterable[TEntity]) -> list[TEntity]:
        """Stage several updates."""

    @abstractmethod
    async def delete(self, id: TKey) -> None:
        """Stage a hard delete by key; a missing key is ignored."""

    @abstractmethod
    async def delete_entity(self, entity: TEntity) -> None:
        """Stage a hard delete of an entity instance."""

    @abstractmethod
    async def delete_range(self, entities: Iterable[TEntity]) -> None:
        """Stage hard deletes for several instances."""

    @abstractmethod
    async def soft_delete(self, id: TKey) -> None:
        """Flag an audited entity as deleted through the update path."""


class Repository(ReadRepository[TEntity, TKey], WriteRepository[TEntity, TKey]):
    """Full repository: reads, writes and the raw-statement escape hatches."""

    @abstractmethod
    async def from_sql_raw(self, sql: str, *params: Any) -> list[TEntity]:
        """Map the rows of a raw SELECT onto the entity type.

        Positional parameters bind to :p0, :p1, ... in the statement.
        """

    @abstractmethod
    async def execute_stored_procedure(
        self, procedure_name: str, *params: Any, result_type: type | None = None
    ) -> Sequence[Any]:
        """Run a row-returning procedure; map onto result_type when given."""

    @abstractmethod
    async def execute_non_query_stored_procedure(self, procedure_name: str, *params: Any) -> int:
        """Run a procedure for its side effects and return the row count."""
