"""SQLAlchemy implementations of the catalog repositories."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload, with_loader_criteria

from src.domain.models.criteria import SearchCriteria
from src.domain.models.pagination import PaginatedResult, PaginationRequest
from src.domain.repositories.catalog import CategoryRepository, ProductRepository
from src.infrastructure.persistence.models.catalog import Category, Product

from .generic import SqlGenericRepository


class SqlProductRepository(SqlGenericRepository[Product, UUID], ProductRepository):
    def __init__(self, session: AsyncSession, entity_type: type[Product] = Product, **kwargs: Any) -> None:
        super().__init__(session, entity_type, **kwargs)

    async def get_by_id(self, id: UUID, include: str | None = None) -> Product | None:
        """Always load the category alongside whatever the caller asked for."""
        paths = "category" if not include else f"category,{include}"
        return await super().get_by_id(id, include=paths)

    async def get_by_sku(self, sku: str) -> Product | None:
        return await self.first_matching(Product.sku == sku)

    async def get_featured(self, include: str | None = None) -> list[Product]:
        return await self.find_all(
            SearchCriteria(
                filter=and_(Product.is_featured.is_(True), Product.is_deleted.is_(False)),
                order_by=lambda q: q.order_by(Product.created_at.desc()),
                include=include,
            )
        )

    async def search_paginated(
        self, query: str, request: PaginationRequest, include: str | None = None
    ) -> PaginatedResult[Product]:
        matches = and_(
            Product.is_deleted.is_(False),
            or_(
                Product.name.icontains(query, autoescape=True),
                Product.description.icontains(query, autoescape=True),
                Product.sku.icontains(query, autoescape=True),
            ),
        )
        return await self.get_paginated(request, SearchCriteria(filter=matches, include=include))


class SqlCategoryRepository(SqlGenericRepository[Category, UUID], CategoryRepository):
    def __init__(self, session: AsyncSession, entity_type: type[Category] = Category, **kwargs: Any) -> None:
        super().__init__(session, entity_type, **kwargs)

    async def get_all_with_sub_categories(self) -> list[Category]:
        stmt = (
            select(Category)
            .where(Category.is_active.is_(True))
            .options(
                selectinload(Category.sub_categories),
                with_loader_criteria(Category, Category.is_active.is_(True)),
            )
            .order_by(Category.name)
        )
        result = await self._session.execute(stmt)
        categories = list(result.scalars().all())
        self._detach(categories)
        return categories
