"""ORM model registry: imports every model module so each mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs, and
registers the sortable fields of each entity with the sort registry.

Import order follows the dependency graph (referenced tables first).
"""

from src.infrastructure.persistence.models.base import (
    AuditMixin,
    CreationStampedMixin,
)
from src.infrastructure.persistence.models.catalog import (
    Category,
    Product,
    ProductAttribute,
    ProductImage,
    ProductTag,
    ProductVariant,
    Tag,
)
from src.infrastructure.persistence.repositories.sorting import sort_registry

for _model in (Category, Product, ProductImage, ProductVariant, ProductAttribute, Tag, ProductTag):
    sort_registry.register_columns(_model)

__all__ = [
    # Capabilities
    "AuditMixin",
    "CreationStampedMixin",
    # Catalog
    "Category",
    "Product",
    "ProductImage",
    "ProductVariant",
    "ProductAttribute",
    "Tag",
    "ProductTag",
]
