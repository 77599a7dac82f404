"""Domain model package.

Value objects used across the persistence boundary (pagination, search
criteria, operation results) and the catalog request/read models.  Nothing
here imports SQLAlchemy; import from this package rather than individual
modules.
"""

from .catalog import (
    CategoryDto,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductAttributeDto,
    ProductDetailDto,
    ProductImageDto,
    ProductSummaryDto,
    ProductVariantDto,
    TagDto,
    UpdateCategoryRequest,
    UpdatePriceRequest,
    UpdateProductRequest,
)
from .criteria import SearchCriteria, split_include_paths
from .entity import Entity
from .pagination import PaginatedResult, PaginationRequest
from .results import OperationResult

__all__ = [
    # persistence value objects
    "Entity",
    "SearchCriteria",
    "split_include_paths",
    "PaginationRequest",
    "PaginatedResult",
    "OperationResult",
    # catalog
    "CategoryDto",
    "CreateCategoryRequest",
    "ProductSummaryDto",
    "UpdateCategoryRequest",
    "CreateProductRequest",
    "UpdateProductRequest",
    "UpdatePriceRequest",
    "ProductDetailDto",
    "ProductImageDto",
    "ProductAttributeDto",
    "ProductVariantDto",
    "TagDto",
]
