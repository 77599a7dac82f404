"""Product use cases on top of the unit of work.

Failures a caller can act on (missing rows, duplicate SKUs) come back as
OperationResult failures; store errors propagate.  update_product is the
one multi-step write and runs inside an explicit transaction.
"""

from __future__ import annotations

import logging
from typing import cast
from uuid import UUID, uuid4

from src.application.mappers import product_detail, product_summary
from src.domain.models.catalog import (
    CreateProductRequest,
    ProductDetailDto,
    ProductImageDto,
    ProductSummaryDto,
    ProductVariantDto,
    UpdatePriceRequest,
    UpdateProductRequest,
)
from src.domain.models.results import OperationResult
from src.domain.repositories.catalog import ProductRepository
from src.domain.repositories.unit_of_work import UnitOfWork
from src.infrastructure.persistence.models.catalog import (
    Category,
    Product,
    ProductAttribute,
    ProductImage,
    ProductTag,
    ProductVariant,
    Tag,
)

logger = logging.getLogger(__name__)

DETAIL_INCLUDE = "images,variants,attributes,product_tags.tag"


def _unique(names: list[str]) -> list[str]:
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


class ProductService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @property
    def _products(self) -> ProductRepository:
        return cast(ProductRepository, self._uow.get_repository(Product, UUID))

    async def _tags_named(self, names: list[str]) -> list[Tag]:
        tags = self._uow.get_repository(Tag, int)
        resolved = []
        for name in _unique(names):
            tag = await tags.first_matching(Tag.name == name)
            if tag is None:
                tag = await tags.add(Tag(name=name, is_active=True))
            resolved.append(tag)
        return resolved

    async def _variant_sku_taken(self, skus: list[str], exclude_id: int | None = None) -> bool:
        variants = self._uow.get_repository(ProductVariant, int)
        where = ProductVariant.sku.in_(skus)
        if exclude_id is not None:
            where = where & (ProductVariant.id != exclude_id)
        return await variants.exists_where(where)

    # --- reads ---

    async def get_product(self, product_id: UUID) -> ProductDetailDto | None:
        product = await self._products.get_by_id(product_id, include=DETAIL_INCLUDE)
        return product_detail(product) if product is not None else None

    async def get_featured_products(self) -> list[ProductSummaryDto]:
        products = await self._products.get_featured(include="images")
        return [product_summary(p) for p in products]

    # --- writes ---

    async def create_product(self, request: CreateProductRequest) -> OperationResult[UUID]:
        products = self._products
        if not await self._uow.get_repository(Category, UUID).exists(request.category_id):
            return OperationResult.failure(f"Category {request.category_id} not found")
        if await products.exists_where(Product.sku == request.sku):
            return OperationResult.failure(f"Product with SKU '{request.sku}' already exists.")
        variant_skus = [variant.sku for variant in request.variants]
        if len(set(variant_skus)) != len(variant_skus) or (
            variant_skus and await self._variant_sku_taken(variant_skus)
        ):
            return OperationResult.failure("Variant SKUs must be unique.")

        product = Product(
            id=uuid4(),
            category_id=request.category_id,
            sku=request.sku,
            name=request.name,
            description=request.description,
            base_price=request.base_price,
            compare_at_price=request.compare_at_price,
            brand=request.brand,
            is_featured=request.is_featured,
            is_active=True,
        )
        product.images = [
            ProductImage(
                image_url=image.image_url,
                is_primary=image.is_primary,
                display_order=image.display_order,
            )
            for image in request.images
        ]
        product.attributes = [
            ProductAttribute(
                attribute_name=attribute.attribute_name,
                attribute_value=attribute.attribute_value,
            )
            for attribute in request.attributes
        ]
        product.variants = [
            ProductVariant(
                sku=variant.sku,
                name=variant.name,
                price=variant.price,
                attributes=dict(variant.attributes),
            )
            for variant in request.variants
        ]
        product.product_tags = [ProductTag(tag=tag) for tag in await self._tags_named(request.tags)]

        await products.add(product)
        await self._uow.save_changes()
        logger.info("Created product %s (%s)", product.id, product.sku)
        return OperationResult.success(product.id)

    async def update_product(
        self, product_id: UUID, request: UpdateProductRequest
    ) -> OperationResult[None]:
        await self._uow.begin_transaction()
        try:
            result = await self._apply_update(product_id, request)
            if result.is_success:
                await self._uow.save_changes()
                await self._uow.commit_transaction()
            else:
                await self._uow.rollback_transaction()
            return result
        except Exception:
            await self._uow.rollback_transaction()
            raise

    async def _apply_update(
        self, product_id: UUID, request: UpdateProductRequest
    ) -> OperationResult[None]:
        products = self._products
        product = await products.get_by_id(product_id)
        if product is None:
            return OperationResult.failure(f"Product {product_id} not found")
        if request.category_id != product.category_id and not await self._uow.get_repository(
            Category, UUID
        ).exists(request.category_id):
            return OperationResult.failure(f"Category {request.category_id} not found")

        if product.base_price != request.base_price:
            logger.info(
                "Price of product %s changed from %s to %s",
                product_id,
                product.base_price,
                request.base_price,
            )
        product.category_id = request.category_id
        product.name = request.name
        product.description = request.description
        product.base_price = request.base_price
        product.compare_at_price = request.compare_at_price
        product.brand = request.brand
        product.is_featured = request.is_featured
        product.is_active = request.is_active
        await products.update(product)
        return OperationResult.success()

    async def update_product_price(
        self, product_id: UUID, request: UpdatePriceRequest
    ) -> OperationResult[None]:
        """Unchanged prices are a successful no-op: nothing is saved."""
        products = self._products
        product = await products.get_by_id(product_id)
        if product is None:
            return OperationResult.failure(f"Product {product_id} not found")
        if product.base_price == request.new_price:
            return OperationResult.success()
        logger.info(
            "Price of product %s changed from %s to %s",
            product_id,
            product.base_price,
            request.new_price,
        )
        product.base_price = request.new_price
        await products.update(product)
        await self._uow.save_changes()
        return OperationResult.success()

    async def delete_product(self, product_id: UUID) -> OperationResult[None]:
        """Hard delete; images, variants, attributes and tag links go with it."""
        products = self._products
        product = await products.get_by_id(product_id)
        if product is None:
            return OperationResult.failure(f"Product {product_id} not found")
        await products.delete_entity(product)
        await self._uow.save_changes()
        return OperationResult.success()

    async def add_image(self, product_id: UUID, image: ProductImageDto) -> OperationResult[int]:
        """Attach an image; a new primary image demotes the current one."""
        products = self._products
        product = await products.get_by_id(product_id, include="images")
        if product is None:
            return OperationResult.failure(f"Product {product_id} not found")
        if image.is_primary:
            for existing in product.images:
                existing.is_primary = False
        added = ProductImage(
            image_url=image.image_url,
            is_primary=image.is_primary,
            display_order=image.display_order,
        )
        product.images.append(added)
        await products.update(product)
        await self._uow.save_changes()
        return OperationResult.success(added.id)

    async def delete_image(self, image_id: int) -> OperationResult[None]:
        images = self._uow.get_repository(ProductImage, int)
        if not await images.exists(image_id):
            return OperationResult.failure(f"Image {image_id} not found")
        await images.delete(image_id)
        await self._uow.save_changes()
        return OperationResult.success()

    async def add_variant(
        self, product_id: UUID, variant: ProductVariantDto
    ) -> OperationResult[int]:
        if not await self._products.exists(product_id):
            return OperationResult.failure(f"Product {product_id} not found")
        if await self._variant_sku_taken([variant.sku]):
            return OperationResult.failure(
                f"Product variant with SKU '{variant.sku}' already exists."
            )
        added = await self._uow.get_repository(ProductVariant, int).add(
            ProductVariant(
                product_id=product_id,
                sku=variant.sku,
                name=variant.name,
                price=variant.price,
                attributes=dict(variant.attributes),
            )
        )
        await self._uow.save_changes()
        return OperationResult.success(added.id)

    async def update_variant(
        self, variant_id: int, variant: ProductVariantDto
    ) -> OperationResult[None]:
        variants = self._uow.get_repository(ProductVariant, int)
        existing = await variants.get_by_id(variant_id)
        if existing is None:
            return OperationResult.failure(f"Product variant {variant_id} not found")
        if await self._variant_sku_taken([variant.sku], exclude_id=variant_id):
            return OperationResult.failure(
                f"Product variant with SKU '{variant.sku}' already exists."
            )
        existing.sku = variant.sku
        existing.name = variant.name
        existing.price = variant.price
        existing.attributes = dict(variant.attributes)
        await variants.update(existing)
        await self._uow.save_changes()
        return OperationResult.success()
