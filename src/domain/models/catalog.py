"""Catalog request and read models.

Requests carry what a caller may set; read models are detached snapshots
built from ORM rows so nothing outside the unit of work touches a session.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateCategoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    parent_category_id: UUID | None = None
    image_url: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    parent_category_id: UUID | None = None
    image_url: str | None = None
    is_active: bool = True


class CategoryDto(BaseModel):
    """Category with its direct sub-categories (one level deep)."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str
    parent_category_id: UUID | None
    image_url: str | None
    is_active: bool
    sub_categories: list[CategoryDto] = Field(default_factory=list)


class ProductSummaryDto(BaseModel):
    """Listing view of a product.

    primary_image_url is None when the images relation was not loaded or no
    image is flagged primary.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    sku: str
    base_price: Decimal
    compare_at_price: Decimal | None = None
    brand: str
    is_featured: bool
    is_available: bool
    primary_image_url: str | None = None


class ProductImageDto(BaseModel):
    id: int | None = None
    image_url: str = Field(min_length=1)
    is_primary: bool = False
    display_order: int = 0


class ProductAttributeDto(BaseModel):
    id: int | None = None
    attribute_name: str = Field(min_length=1)
    attribute_value: str


class ProductVariantDto(BaseModel):
    """Variant payload; attributes is the free-form option map."""

    id: int | None = None
    product_id: UUID | None = None
    sku: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(gt=0)
    attributes: dict[str, Any] = Field(default_factory=dict)


class TagDto(BaseModel):
    id: int
    name: str


class CreateProductRequest(BaseModel):
    """New product with its images, attributes, variants and tag names.

    Tags are referenced by name; unknown names create the tag.
    """

    category_id: UUID
    sku: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    base_price: Decimal = Field(gt=0)
    compare_at_price: Decimal | None = None
    brand: str = ""
    is_featured: bool = False
    images: list[ProductImageDto] = Field(default_factory=list)
    attributes: list[ProductAttributeDto] = Field(default_factory=list)
    variants: list[ProductVariantDto] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    category_id: UUID
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    base_price: Decimal = Field(gt=0)
    compare_at_price: Decimal | None = None
    brand: str = ""
    is_featured: bool = False
    is_active: bool = True


class UpdatePriceRequest(BaseModel):
    new_price: Decimal = Field(gt=0)


class ProductDetailDto(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    sku: str
    base_price: Decimal
    compare_at_price: Decimal | None = None
    description: str
    brand: str
    is_featured: bool
    is_active: bool
    is_available: bool
    category_id: UUID
    images: list[ProductImageDto] = Field(default_factory=list)
    attributes: list[ProductAttributeDto] = Field(default_factory=list)
    variants: list[ProductVariantDto] = Field(default_factory=list)
    tags: list[TagDto] = Field(default_factory=list)
