"""Unit tests for ORM model structure.

Verifies table names, nullability, constraints, audit mixins and package
registration.  No database connection is required.
"""

import uuid
from datetime import datetime

import src.infrastructure.persistence  # noqa: F401  registers all mappers
from src.infrastructure.database import Base
from src.infrastructure.persistence.models import AuditMixin, CreationStampedMixin
from src.infrastructure.persistence.models import __all__ as models_all
from src.infrastructure.persistence.models.catalog import (
    Category,
    Product,
    ProductAttribute,
    ProductImage,
    ProductTag,
    ProductVariant,
    Tag,
)


# --- Table names ---

def test_category_tablename():
    assert Category.__tablename__ == "categories"


def test_product_tablename():
    assert Product.__tablename__ == "products"


def test_product_tag_tablename():
    assert ProductTag.__tablename__ == "product_tags"


# --- Nullable / not-null columns ---

def test_category_parent_is_nullable():
    assert Category.__table__.c["parent_category_id"].nullable is True


def test_product_sku_is_not_nullable():
    assert Product.__table__.c["sku"].nullable is False


def test_product_compare_at_price_is_nullable():
    assert Product.__table__.c["compare_at_price"].nullable is True


def test_updated_at_is_nullable():
    assert Product.__table__.c["updated_at"].nullable is True


def test_created_at_is_not_nullable():
    assert ProductAttribute.__table__.c["created_at"].nullable is False


# --- Constraints and indexes ---

def _unique_column_sets(model):
    return {
        tuple(sorted(col.name for col in constraint.columns))
        for constraint in model.__table__.constraints
        if constraint.__class__.__name__ == "UniqueConstraint"
    }


def test_product_sku_is_unique():
    assert ("sku",) in _unique_column_sets(Product)


def test_variant_sku_is_unique():
    assert ("sku",) in _unique_column_sets(ProductVariant)


def test_tag_name_is_unique():
    assert ("name",) in _unique_column_sets(Tag)


def test_product_tag_pair_is_unique():
    assert ("product_id", "tag_id") in _unique_column_sets(ProductTag)


def test_product_category_id_is_indexed():
    assert Product.__table__.c["category_id"].index is True


def test_external_id_is_unique():
    assert Category.__table__.c["external_id"].unique is True


# --- Audit mixins ---

def test_audited_models_use_audit_mixin():
    for model in (Category, Product, ProductImage, ProductVariant, Tag, ProductTag):
        assert issubclass(model, AuditMixin), model.__name__


def test_product_attribute_is_only_creation_stamped():
    assert issubclass(ProductAttribute, CreationStampedMixin)
    assert not issubclass(ProductAttribute, AuditMixin)
    assert "updated_at" not in ProductAttribute.__table__.c
    assert "is_deleted" not in ProductAttribute.__table__.c


def test_new_audited_entity_gets_external_id():
    first, second = Tag(name="a"), Tag(name="b")
    assert isinstance(first.external_id, uuid.UUID)
    assert first.external_id != second.external_id


def test_new_audited_entity_defaults_flags():
    tag = Tag(name="sale")
    assert tag.is_deleted is False
    assert tag.is_active is False


def test_new_entity_gets_created_at():
    attribute = ProductAttribute(attribute_name="Weight", attribute_value="1kg")
    assert isinstance(attribute.created_at, datetime)
    assert attribute.created_at.tzinfo is not None


def test_explicit_external_id_is_kept():
    value = uuid.uuid4()
    assert Tag(name="x", external_id=value).external_id == value


# --- Derived properties ---

def test_product_is_available_with_stock():
    assert Product(stock_quantity=3).is_available is True


def test_product_is_not_available_without_stock():
    assert Product(stock_quantity=0).is_available is False


# --- Package registration ---

def test_all_tables_registered_in_metadata():
    expected = {
        "categories",
        "products",
        "product_images",
        "product_variants",
        "product_attributes",
        "tags",
        "product_tags",
    }
    assert expected == set(Base.metadata.tables)


def test_models_all_exports_every_model():
    for name in ("Category", "Product", "ProductImage", "ProductVariant",
                 "ProductAttribute", "Tag", "ProductTag"):
        assert name in models_all
