"""Session packages schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from podocare_client.core.enums import PackageStatusEnum
from podocare_client.shared.schemas import ApiSchema


class PackageCreate(ApiSchema):
    """Create session package request."""

    name: str = Field(min_length=1, max_length=128)
    description: str | None = None
    price: float = Field(ge=0)
    sessions: int = Field(ge=1)
    status: PackageStatusEnum = PackageStatusEnum.ACTIVE
    notes: str | None = None


class PackageUpdate(ApiSchema):
    """Partial package update."""

    name: str | None = Field(default=None, min_length=1, max_length=128)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    sessions: int | None = Field(default=None, ge=1)
    status: PackageStatusEnum | None = None
    notes: str | None = None
    is_active: bool | None = None


class Package(ApiSchema):
    """Session package offered by the clinic."""

    id: str
    name: str | None = None
    description: str | None = None
    price: float | None = None
    sessions: int | None = None
    status: PackageStatusEnum | None = None
    notes: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class PatientPackageCreate(ApiSchema):
    """Sell a package to a patient."""

    patient_id: str
    package_id: str
    remaining_sessions: int = Field(ge=0)
    purchased_at: str | None = None
    is_active: bool = True


class PatientPackageUpdate(ApiSchema):
    remaining_sessions: int | None = Field(default=None, ge=0)
    completed_at: str | None = None
    is_active: bool | None = None


class PatientPackage(ApiSchema):
    """Session package purchased by a patient."""

    id: str
    patient_id: str | None = None
    package_id: str | None = None
    remaining_sessions: int = 0
    purchased_at: str | None = None
    completed_at: str | None = None
    is_active: bool = True
    package: Package | None = None
    patient: dict[str, Any] | None = None


class PackageSessionUse(ApiSchema):
    """Spend one session of a patient package on an appointment."""

    appointment_id: str
    notes: str | None = None


class PackageSession(ApiSchema):
    """One consumed package session."""

    id: str
    patient_package_id: str | None = None
    appointment_id: str | None = None
    used_at: str | None = None
    notes: str | None = None
    appointment: dict[str, Any] | None = None
