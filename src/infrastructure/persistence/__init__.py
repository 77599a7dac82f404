"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration),
registers sortable fields and catalog repositories, and exports the
repository implementations and the unit of work.
"""

from src.infrastructure.persistence.models import *  # noqa: F401, F403
from src.infrastructure.persistence.models import __all__ as _orm_all
from src.infrastructure.persistence.repositories import (
    RepositoryRegistry,
    SortRegistry,
    SqlCategoryRepository,
    SqlGenericRepository,
    SqlProductRepository,
    repository_registry,
    sort_registry,
)
from src.infrastructure.persistence.unit_of_work import SqlUnitOfWork

__all__ = _orm_all + [
    "SqlGenericRepository",
    "SqlProductRepository",
    "SqlCategoryRepository",
    "RepositoryRegistry",
    "repository_registry",
    "SortRegistry",
    "sort_registry",
    "SqlUnitOfWork",
]
