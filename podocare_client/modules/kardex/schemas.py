"""Kardex (inventory movement) schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from podocare_client.core.enums import MovementTypeEnum
from podocare_client.modules.products.schemas import Product
from podocare_client.shared.schemas import ApiSchema


class ProductMovementCreate(ApiSchema):
    """Register stock entry or exit request."""

    product_id: str
    type: MovementTypeEnum
    quantity: int = Field(ge=1)
    cost_unit: float = Field(ge=0)
    sale_price: float | None = Field(default=None, ge=0)
    date: str | None = None
    related_table: str | None = None
    related_id: str | None = None


class ProductMovement(ApiSchema):
    """Kardex movement record."""

    id: str
    product_id: str
    date: str | None = None
    type: MovementTypeEnum
    quantity: int
    cost_unit: float = 0
    total_cost: float = 0
    sale_price: float | None = None
    stock_after: int | None = None
    related_table: str | None = None
    related_id: str | None = None
    user_id: str | None = None
    reference_kardex_id: str | None = None
    created_at: str | None = None
    product: dict[str, Any] | None = None


class KardexSummary(ApiSchema):
    """Inventory totals."""

    total_entries: int = 0
    total_exits: int = 0
    total_inventory_value: float = 0
    low_stock: list[Product] = Field(default_factory=list)
