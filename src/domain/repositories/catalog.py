"""Catalog repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING
from uuid import UUID

from src.domain.models.pagination import PaginatedResult, PaginationRequest

from .base import Repository

if TYPE_CHECKING:
    from src.infrastructure.persistence.models.catalog import Category, Product


class ProductRepository(Repository["Product", UUID]):
    """Product access on top of the generic repository.

    get_by_id always loads the product's category.  get_featured and
    search_paginated exclude soft-deleted products; the generic reads do not.
    """

    @abstractmethod
    async def get_by_sku(self, sku: str) -> Product | None:
        """Return the product with the given SKU, or None."""

    @abstractmethod
    async def get_featured(self, include: str | None = None) -> list[Product]:
        """Featured, non-deleted products, newest first."""

    @abstractmethod
    async def search_paginated(
        self, query: str, request: PaginationRequest, include: str | None = None
    ) -> PaginatedResult[Product]:
        """Page through non-deleted products whose name, description or SKU contains query."""


class CategoryRepository(Repository["Category", UUID]):
    @abstractmethod
    async def get_all_with_sub_categories(self) -> list[Category]:
        """Active categories ordered by name, with their active sub-categories loaded."""
