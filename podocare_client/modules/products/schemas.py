"""Products and product categories schemas."""

from __future__ import annotations

from pydantic import Field

from podocare_client.core.enums import ProductStatusEnum
from podocare_client.shared.schemas import ApiSchema


class ProductCategoryCreate(ApiSchema):
    """Create product category request."""

    name: str = Field(min_length=1, max_length=128)


class ProductCategoryUpdate(ApiSchema):
    """Rename product category request."""

    name: str | None = Field(default=None, min_length=1, max_length=128)


class ProductCategory(ApiSchema):
    """Product category record."""

    id: str
    name: str
    slug: str | None = None


class ProductCreate(ApiSchema):
    """Create product request."""

    name: str = Field(min_length=1, max_length=256)
    description: str | None = None
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    category_id: str
    sku: str | None = None
    image_url: str | None = None
    status: ProductStatusEnum = ProductStatusEnum.ACTIVE
    commission: float | None = Field(default=None, ge=0, le=100)


class ProductUpdate(ApiSchema):
    """Partial product update."""

    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category_id: str | None = None
    sku: str | None = None
    image_url: str | None = None
    status: ProductStatusEnum | None = None
    commission: float | None = Field(default=None, ge=0, le=100)


class Product(ApiSchema):
    """Product record."""

    id: str
    name: str
    slug: str | None = None
    description: str | None = None
    price: float
    stock: int = 0
    category_id: str | None = None
    image_url: str | None = None
    sku: str | None = None
    status: ProductStatusEnum = ProductStatusEnum.ACTIVE
    commission: float | None = None
    created_at: str | None = None
    updated_at: str | None = None
    category: ProductCategory | None = None
