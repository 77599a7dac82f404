"""Catalog ORM models: categories, products and product satellites.

Key types vary on purpose: categories and products use caller-visible
UUIDs, satellites use store-generated integer identities.  Every catalog
record opts into AuditMixin except product_attributes, which only carries
created_at.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database import Base

from .base import AuditMixin, CreationStampedMixin

# SQLite only auto-increments INTEGER PRIMARY KEY columns.
BigIntIdentity = BigInteger().with_variant(Integer(), "sqlite")


class Category(AuditMixin, Base):
    """Catalog category; parent_category_id builds a one-level-per-row tree."""

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    parent_category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True
    )
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    parent_category: Mapped[Optional["Category"]] = relationship(
        back_populates="sub_categories", remote_side="Category.id"
    )
    sub_categories: Mapped[list["Category"]] = relationship(back_populates="parent_category")
    products: Mapped[list["Product"]] = relationship(back_populates="category")


class Product(AuditMixin, Base):
    """Sellable product.

    stock_quantity is mirrored from the inventory service for display only;
    is_available is derived from it and never stored.
    """

    __tablename__ = "products"
    __table_args__ = (UniqueConstraint("sku", name="uq_products_sku"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id"), nullable=False, index=True
    )
    sku: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    base_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    compare_at_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 2), nullable=True)
    brand: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    category: Mapped["Category"] = relationship(back_populates="products")
    images: Mapped[list["ProductImage"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )
    variants: Mapped[list["ProductVariant"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )
    attributes: Mapped[list["ProductAttribute"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )
    product_tags: Mapped[list["ProductTag"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )

    @property
    def is_available(self) -> bool:
        return (self.stock_quantity or 0) > 0


class ProductImage(AuditMixin, Base):
    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(BigIntIdentity, primary_key=True, autoincrement=True)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    product: Mapped["Product"] = relationship(back_populates="images")


class ProductVariant(AuditMixin, Base):
    """Purchasable variant, e.g. "Red - Large".

    attributes holds the free-form option map ({"color": "red"}).
    """

    __tablename__ = "product_variants"
    __table_args__ = (UniqueConstraint("sku", name="uq_product_variants_sku"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    sku: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    attributes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    product: Mapped["Product"] = relationship(back_populates="variants")


class ProductAttribute(CreationStampedMixin, Base):
    """Name/value specification line.  Insert-only, hence no audit trail."""

    __tablename__ = "product_attributes"

    id: Mapped[int] = mapped_column(BigIntIdentity, primary_key=True, autoincrement=True)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    attribute_name: Mapped[str] = mapped_column(Text, nullable=False)
    attribute_value: Mapped[str] = mapped_column(Text, nullable=False)

    product: Mapped["Product"] = relationship(back_populates="attributes")


class Tag(AuditMixin, Base):
    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("name", name="uq_tags_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    product_tags: Mapped[list["ProductTag"]] = relationship(back_populates="tag")


class ProductTag(AuditMixin, Base):
    __tablename__ = "product_tags"
    __table_args__ = (UniqueConstraint("product_id", "tag_id", name="uq_product_tags_pair"),)

    id: Mapped[int] = mapped_column(BigIntIdentity, primary_key=True, autoincrement=True)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    tag_id: Mapped[int] = mapped_column(Integer, ForeignKey("tags.id"), nullable=False)

    product: Mapped["Product"] = relationship(back_populates="product_tags")
    tag: Mapped["Tag"] = relationship(back_populates="product_tags")
