"""Concrete SQLAlchemy repository implementations.

Exports the generic repository, the catalog repositories, and the two
startup registries the unit of work reads from:

  - repository_registry: entity type -> repository class
  - sort_registry: entity type -> sortable field accessors

Importing this package registers the catalog repositories.
"""

from __future__ import annotations

from src.infrastructure.persistence.models.catalog import Category, Product

from .catalog import SqlCategoryRepository, SqlProductRepository
from .generic import SqlGenericRepository
from .registry import RepositoryRegistry, repository_registry
from .sorting import SortRegistry, sort_registry

repository_registry.register(Product, SqlProductRepository)
repository_registry.register(Category, SqlCategoryRepository)

__all__ = [
    "SqlGenericRepository",
    "SqlProductRepository",
    "SqlCategoryRepository",
    "RepositoryRegistry",
    "repository_registry",
    "SortRegistry",
    "sort_registry",
]
