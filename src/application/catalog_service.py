"""Catalog use cases on top of the unit of work.

Each method runs against the caller's unit of work and saves once at the
end; failures the caller can act on come back as OperationResult failures,
store errors propagate.
"""

from __future__ import annotations

from typing import cast
from uuid import UUID

from sqlalchemy import and_

from src.application.mappers import category_dto, product_summary
from src.domain.models.catalog import (
    CategoryDto,
    CreateCategoryRequest,
    ProductSummaryDto,
    UpdateCategoryRequest,
)
from src.domain.models.criteria import SearchCriteria
from src.domain.models.pagination import PaginatedResult, PaginationRequest
from src.domain.models.results import OperationResult
from src.domain.repositories.catalog import CategoryRepository, ProductRepository
from src.domain.repositories.unit_of_work import UnitOfWork
from src.infrastructure.persistence.models.catalog import Category, Product


class CatalogService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @property
    def _categories(self) -> CategoryRepository:
        return cast(CategoryRepository, self._uow.get_repository(Category, UUID))

    @property
    def _products(self) -> ProductRepository:
        return cast(ProductRepository, self._uow.get_repository(Product, UUID))

    async def create_category(self, request: CreateCategoryRequest) -> OperationResult[UUID]:
        categories = self._categories
        if request.parent_category_id is not None and not await categories.exists(
            request.parent_category_id
        ):
            return OperationResult.failure(
                f"Parent category {request.parent_category_id} not found"
            )
        category = Category(
            name=request.name,
            description=request.description,
            parent_category_id=request.parent_category_id,
            image_url=request.image_url,
            is_active=True,
        )
        await categories.add(category)
        await self._uow.save_changes()
        return OperationResult.success(category.id)

    async def update_category(
        self, category_id: UUID, request: UpdateCategoryRequest
    ) -> OperationResult[None]:
        categories = self._categories
        category = await categories.get_by_id(category_id)
        if category is None:
            return OperationResult.failure(f"Category {category_id} not found")
        if request.parent_category_id == category_id:
            return OperationResult.failure("A category cannot be its own parent")
        category.name = request.name
        category.description = request.description
        category.parent_category_id = request.parent_category_id
        category.image_url = request.image_url
        category.is_active = request.is_active
        await categories.update(category)
        await self._uow.save_changes()
        return OperationResult.success()

    async def delete_category(self, category_id: UUID) -> OperationResult[None]:
        categories = self._categories
        if await categories.exists_where(Category.parent_category_id == category_id):
            return OperationResult.failure("Cannot delete category with sub-categories.")
        if await self._products.exists_where(Product.category_id == category_id):
            return OperationResult.failure("Cannot delete category that has products assigned.")
        await categories.delete(category_id)
        await self._uow.save_changes()
        return OperationResult.success()

    async def list_categories(self) -> list[CategoryDto]:
        categories = await self._categories.get_all_with_sub_categories()
        return [category_dto(c, c.sub_categories) for c in categories]

    async def get_products_by_category(self, category_id: UUID) -> list[ProductSummaryDto]:
        criteria: SearchCriteria[Product] = SearchCriteria(
            filter=and_(Product.category_id == category_id, Product.is_active.is_(True)),
            include="images",
            as_no_tracking=True,
        )
        products = await self._products.find_all(criteria)
        return [product_summary(p) for p in products]

    async def search_products(
        self, query: str, request: PaginationRequest
    ) -> PaginatedResult[ProductSummaryDto]:
        page = await self._products.search_paginated(query, request, include="images")
        return PaginatedResult(
            items=[product_summary(p) for p in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
        )

    async def archive_product(self, product_id: UUID) -> OperationResult[None]:
        """Soft-delete a product; it stays readable by id with is_deleted set."""
        products = self._products
        if not await products.exists(product_id):
            return OperationResult.failure(f"Product {product_id} not found")
        await products.soft_delete(product_id)
        await self._uow.save_changes()
        return OperationResult.success()
