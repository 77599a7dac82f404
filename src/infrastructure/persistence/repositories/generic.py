"""SQLAlchemy implementation of the generic Repository.

One SqlGenericRepository serves any mapped entity exposing an ``id``
primary key.  It borrows the unit of work's AsyncSession and never commits,
closes or replaces it: writes are staged and reach the store when the unit
of work saves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.errors import InvalidArgumentError
from src.domain.models.criteria import SearchCriteria, split_include_paths
from src.domain.models.entity import Entity
from src.domain.models.pagination import PaginatedResult, PaginationRequest
from src.domain.repositories.base import Repository
from src.infrastructure.persistence.models.base import AuditMixin, CreationStampedMixin, utcnow

from .query import include_options, resolve_predicate
from .raw import run_entity_query, run_non_query_procedure, run_procedure
from .sorting import SortRegistry, sort_registry

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity", bound=Entity[Any])
TKey = TypeVar("TKey")


class SqlGenericRepository(Repository[TEntity, TKey], Generic[TEntity, TKey]):
    """CRUD, search and pagination for one entity type.

    Audit stamping is driven by the entity's opt-in mixins:
      - CreationStampedMixin: add() sets created_at (and created_by when the
        repository has an actor and the entity is audited).
      - AuditMixin: update() sets updated_at/updated_by; soft_delete() is
        allowed.
    """

    def __init__(
        self,
        session: AsyncSession,
        entity_type: type[TEntity],
        *,
        sorts: SortRegistry | None = None,
        clock: Callable[[], datetime] = utcnow,
        actor: str | None = None,
    ) -> None:
        self._session = session
        self._entity_type = entity_type
        self._sorts = sorts if sorts is not None else sort_registry
        self._clock = clock
        self._actor = actor

    @property
    def entity_type(self) -> type[TEntity]:
        return self._entity_type

    @property
    def _id(self) -> Any:
        return self._entity_type.id  # type: ignore[attr-defined]

    def _select(self, include: str | None = None) -> Select[tuple[TEntity]]:
        stmt = select(self._entity_type)
        options = include_options(self._entity_type, include)
        if options:
            stmt = stmt.options(*options)
        return stmt

    @staticmethod
    def _as_criteria(where_or_criteria: Any) -> SearchCriteria[TEntity]:
        if isinstance(where_or_criteria, SearchCriteria):
            return where_or_criteria
        return SearchCriteria(filter=where_or_criteria)

    def _detach(self, rows: Iterable[TEntity]) -> None:
        # Rows carrying unsaved changes stay attached.
        for row in rows:
            if row in self._session and not self._session.is_modified(row):
                self._session.expunge(row)

    # --- reads ---

    async def get_by_id(self, id: TKey, include: str | None = None) -> TEntity | None:
        if not split_include_paths(include):
            return await self._session.get(self._entity_type, id)
        stmt = self._select(include).where(self._id == id)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def first_matching(self, where: Any, include: str | None = None) -> TEntity | None:
        stmt = self._select(include).where(resolve_predicate(self._entity_type, where)).limit(1)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def get_all(self, include: str | None = None) -> list[TEntity]:
        result = await self._session.execute(self._select(include))
        return list(result.scalars().all())

    async def find_all(self, where_or_criteria: Any) -> list[TEntity]:
        criteria = self._as_criteria(where_or_criteria)
        stmt = self._select(criteria.include)
        predicate = resolve_predicate(self._entity_type, criteria.filter)
        if predicate is not None:
            stmt = stmt.where(predicate)
        if criteria.order_by is not None:
            stmt = criteria.order_by(stmt)
        if criteria.skip is not None:
            stmt = stmt.offset(criteria.skip)
        if criteria.take is not None:
            stmt = stmt.limit(criteria.take)
        result = await self._session.execute(stmt)
        rows = list(result.scalars().all())
        if criteria.as_no_tracking:
            self._detach(rows)
        return rows

    async def get_paginated(
        self,
        request: PaginationRequest,
        where_or_criteria: Any | SearchCriteria[TEntity] | None = None,
    ) -> PaginatedResult[TEntity]:
        """One page plus the filtered total.

        The request's page and page_size choose the slice; criteria.skip is
        ignored here and criteria.take only matters when it is 0, which
        returns no items but still reports total_count.
        """
        criteria = self._as_criteria(where_or_criteria)

        # Resolve everything that can fail before the first round trip.
        order = None
        if criteria.order_by is None and request.sort_field:
            order = self._sorts.resolve(
                self._entity_type, request.sort_field, request.sort_descending
            )
        stmt = self._select(criteria.include)
        predicate = resolve_predicate(self._entity_type, criteria.filter)

        total_count = await self.count(predicate)
        if criteria.take == 0:
            return PaginatedResult(
                items=[], total_count=total_count, page=request.page, page_size=request.page_size
            )

        if predicate is not None:
            stmt = stmt.where(predicate)
        if criteria.order_by is not None:
            stmt = criteria.order_by(stmt)
        elif order is not None:
            stmt = stmt.order_by(order)
        stmt = stmt.offset(request.offset).limit(request.page_size)

        result = await self._session.execute(stmt)
        items = list(result.scalars().all())
        if criteria.as_no_tracking:
            self._detach(items)
        return PaginatedResult(
            items=items,
            total_count=total_count,
            page=request.page,
            page_size=request.page_size,
        )

    async def count(self, where: Any | None = None) -> int:
        stmt = select(func.count()).select_from(self._entity_type)
        predicate = resolve_predicate(self._entity_type, where)
        if predicate is not None:
            stmt = stmt.where(predicate)
        return int(await self._session.scalar(stmt) or 0)

    async def exists(self, id: TKey) -> bool:
        return bool(await self._session.scalar(select(exists().where(self._id == id))))

    async def exists_where(self, where: Any) -> bool:
        predicate = resolve_predicate(self._entity_type, where)
        return bool(await self._session.scalar(select(exists().where(predicate))))

    # --- writes ---

    def _stamp_created(self, entity: TEntity) -> None:
        if isinstance(entity, CreationStampedMixin):
            entity.created_at = self._clock()
        if isinstance(entity, AuditMixin) and self._actor is not None:
            entity.created_by = self._actor

    def _stamp_updated(self, entity: TEntity) -> None:
        if isinstance(entity, AuditMixin):
            entity.updated_at = self._clock()
            if self._actor is not None:
                entity.updated_by = self._actor

    async def _attached(self, entity: TEntity) -> TEntity:
        if entity in self._session:
            return entity
        return await self._session.merge(entity)

    async def add(self, entity: TEntity) -> TEntity:
        self._stamp_created(entity)
        self._session.add(entity)
        return entity

    async def add_range(self, entities: Iterable[TEntity]) -> list[TEntity]:
        staged = list(entities)
        for entity in staged:
            self._stamp_created(entity)
        self._session.add_all(staged)
        return staged

    async def update(self, entity: TEntity) -> TEntity:
        self._stamp_updated(entity)
        return await self._attached(entity)

    async def update_range(self, entities: Iterable[TEntity]) -> list[TEntity]:
        return [await self.update(entity) for entity in entities]

    async def delete(self, id: TKey) -> None:
        entity = await self.get_by_id(id)
        if entity is not None:
            await self._session.delete(entity)

    async def delete_entity(self, entity: TEntity) -> None:
        await self._session.delete(await self._attached(entity))

    async def delete_range(self, entities: Iterable[TEntity]) -> None:
        for entity in entities:
            await self.delete_entity(entity)

    async def soft_delete(self, id: TKey) -> None:
        if not issubclass(self._entity_type, AuditMixin):
            raise InvalidArgumentError(
                f"{self._entity_type.__name__} has no audit fields and cannot be soft-deleted"
            )
        entity = await self.get_by_id(id)
        if entity is None:
            return
        entity.is_deleted = True  # type: ignore[attr-defined]
        await self.update(entity)

    # --- escape hatches ---

    async def from_sql_raw(self, sql: str, *params: Any) -> list[TEntity]:
        return await run_entity_query(self._session, self._entity_type, sql, params)

    async def execute_stored_procedure(
        self, procedure_name: str, *params: Any, result_type: type | None = None
    ) -> Sequence[Any]:
        return await run_procedure(self._session, procedure_name, params, result_type)

    async def execute_non_query_stored_procedure(self, procedure_name: str, *params: Any) -> int:
        return await run_non_query_procedure(self._session, procedure_name, params)
