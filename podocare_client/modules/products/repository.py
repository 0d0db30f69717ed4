"""Products repository layer."""

from __future__ import annotations

from podocare_client.modules.products.schemas import (
    Product,
    ProductCategory,
    ProductCategoryCreate,
    ProductCategoryUpdate,
    ProductCreate,
    ProductUpdate,
)
from podocare_client.shared.envelope import NESTED, NESTED_SERVER_PAGES
from podocare_client.shared.pagination import PaginatedResponse, PaginatedSearchParams
from podocare_client.shared.repository import ApiRepository, with_filters


class ProductRepository(ApiRepository[Product, ProductCreate, ProductUpdate]):
    """API operations for the product catalog."""

    endpoint = "/product"
    entity_schema = Product
    envelope = NESTED_SERVER_PAGES
    resource_label = "products"
    entity_label = "product"

    async def get_by_category(
        self,
        category_id: str,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[Product]:
        return await self.get_all(with_filters(params, categoryId=category_id))


class ProductCategoryRepository(
    ApiRepository[ProductCategory, ProductCategoryCreate, ProductCategoryUpdate],
):
    """API operations for product categories."""

    endpoint = "/product-category"
    entity_schema = ProductCategory
    envelope = NESTED
    resource_label = "categories"
    entity_label = "category"
