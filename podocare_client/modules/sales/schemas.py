"""Sales schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from podocare_client.core.enums import PaymentMethodEnum, SaleStateEnum
from podocare_client.shared.schemas import ApiSchema


class SaleItemCreate(ApiSchema):
    """One product line of a new sale."""

    product_id: str
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)


class SaleCreate(ApiSchema):
    """Point-of-sale checkout request."""

    customer_id: str | None = None
    sale_items: list[SaleItemCreate] = Field(min_length=1)
    payment_method: PaymentMethodEnum
    note: str | None = None


class SaleItem(ApiSchema):
    """Sale line as stored by the backend."""

    id: str | None = None
    sale_id: str | None = None
    product_id: str | None = None
    quantity: int
    price: float
    product: dict[str, Any] | None = None


class Sale(ApiSchema):
    """Sale record."""

    id: str
    sale_items: list[SaleItem] = Field(default_factory=list)
    total_amount: float = 0
    patient_id: str | None = None
    appointment_id: str | None = None
    seller_id: str | None = None
    date: str | None = None
    created_at: str | None = None
    payment_method: str | None = None
    state: SaleStateEnum | None = None
    canceled_at: str | None = None
    cancel_reason: str | None = None
    patient: dict[str, Any] | None = None
    user: dict[str, Any] | None = None


class SaleStats(ApiSchema):
    """Sales counters for the dashboard header."""

    today: int = 0
    today_amount: float = 0
    this_month: int = 0
    this_month_amount: float = 0
