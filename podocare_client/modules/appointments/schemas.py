"""Appointments schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from podocare_client.core.enums import AppointmentStatusEnum
from podocare_client.shared.schemas import ApiSchema


class AppointmentCreate(ApiSchema):
    """Register appointment request."""

    patient_id: str
    worker_id: str
    date_time: str
    treatment_notes: str | None = None
    diagnosis: str | None = None
    observation: str | None = None
    treatment_price: float | None = Field(default=None, ge=0)


class AppointmentUpdate(ApiSchema):
    """Partial appointment update."""

    worker_id: str | None = None
    date: str | None = None
    treatment_notes: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    observation: str | None = None
    treatment_price: float | None = Field(default=None, ge=0)
    appointment_price: float | None = Field(default=None, ge=0)
    status: AppointmentStatusEnum | None = None


class Appointment(ApiSchema):
    """Appointment record."""

    id: str
    patient_id: str | None = None
    worker_id: str | None = None
    date: str | None = None
    treatment_notes: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    treatment_price: float | None = None
    appointment_price: float | None = None
    status: AppointmentStatusEnum = AppointmentStatusEnum.REGISTERED
    observation: str | None = None
    sale_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    # Related records arrive partially populated depending on the endpoint.
    patient: dict[str, Any] | None = None
    worker: dict[str, Any] | None = None
    payment: dict[str, Any] | None = None
