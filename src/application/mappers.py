"""ORM row -> DTO snapshots.

Every function here reads only relationships the caller has already
loaded; touching an unloaded one on a detached row raises.
"""

from __future__ import annotations

from src.domain.models.catalog import (
    CategoryDto,
    ProductAttributeDto,
    ProductDetailDto,
    ProductImageDto,
    ProductSummaryDto,
    ProductVariantDto,
    TagDto,
)
from src.infrastructure.persistence.models.catalog import Category, Product


def category_dto(category: Category, sub_categories: list[Category] | None = None) -> CategoryDto:
    return CategoryDto(
        id=category.id,
        name=category.name,
        description=category.description,
        parent_category_id=category.parent_category_id,
        image_url=category.image_url,
        is_active=category.is_active,
        sub_categories=[category_dto(sub) for sub in sub_categories or []],
    )


def product_summary(product: Product) -> ProductSummaryDto:
    """Requires product.images."""
    primary = next((image for image in product.images if image.is_primary), None)
    return ProductSummaryDto(
        id=product.id,
        name=product.name,
        sku=product.sku,
        base_price=product.base_price,
        compare_at_price=product.compare_at_price,
        brand=product.brand,
        is_featured=product.is_featured,
        is_available=product.is_available,
        primary_image_url=primary.image_url if primary else None,
    )


def product_detail(product: Product) -> ProductDetailDto:
    """Requires images, variants, attributes and product_tags.tag."""
    return ProductDetailDto(
        id=product.id,
        name=product.name,
        sku=product.sku,
        base_price=product.base_price,
        compare_at_price=product.compare_at_price,
        description=product.description,
        brand=product.brand,
        is_featured=product.is_featured,
        is_active=product.is_active,
        is_available=product.is_available,
        category_id=product.category_id,
        images=[
            ProductImageDto(
                id=image.id,
                image_url=image.image_url,
                is_primary=image.is_primary,
                display_order=image.display_order,
            )
            for image in sorted(product.images, key=lambda image: image.display_order)
        ],
        attributes=[
            ProductAttributeDto(
                id=attribute.id,
                attribute_name=attribute.attribute_name,
                attribute_value=attribute.attribute_value,
            )
            for attribute in product.attributes
        ],
        variants=[
            ProductVariantDto(
                id=variant.id,
                product_id=variant.product_id,
                sku=variant.sku,
                name=variant.name,
                price=variant.price,
                attributes=variant.attributes,
            )
            for variant in product.variants
        ],
        tags=[TagDto(id=link.tag_id, name=link.tag.name) for link in product.product_tags],
    )
