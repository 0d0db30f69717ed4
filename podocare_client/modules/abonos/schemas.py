"""Abonos (patient prepayments) schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from podocare_client.core.enums import PaymentMethodEnum
from podocare_client.shared.schemas import ApiSchema


class AbonoCreate(ApiSchema):
    """Register prepayment request."""

    patient_id: str
    amount: float = Field(gt=0)
    method: PaymentMethodEnum
    notes: str | None = None


class AbonoUpdate(ApiSchema):
    """Partial abono update."""

    amount: float | None = Field(default=None, gt=0)
    method: PaymentMethodEnum | None = None
    notes: str | None = None
    is_active: bool | None = None


class AbonoUse(ApiSchema):
    """Spend part of an abono on an appointment or sale."""

    amount: float = Field(gt=0)
    appointment_id: str | None = None
    sale_id: str | None = None
    notes: str | None = None


class Abono(ApiSchema):
    """Prepaid amount registered for a patient."""

    id: str
    patient_id: str | None = None
    amount: float
    method: PaymentMethodEnum | None = None
    notes: str | None = None
    registered_at: str | None = None
    used_amount: float = 0
    remaining_amount: float = 0
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    patient: dict[str, Any] | None = None


class AbonoUsage(ApiSchema):
    """Part of an abono consumed by an appointment or sale."""

    id: str
    abono_id: str | None = None
    appointment_id: str | None = None
    sale_id: str | None = None
    amount: float
    used_at: str | None = None
    notes: str | None = None


class AbonoBalance(ApiSchema):
    balance: float = 0
