"""Workers schemas."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from podocare_client.shared.schemas import ApiSchema


class WorkerCreate(ApiSchema):
    """Create worker account request."""

    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    username: str = Field(min_length=3, max_length=64)
    email: str | None = None
    phone: str | None = None
    specialization: str | None = None
    worker_type: str | None = None
    password: str | None = Field(default=None, min_length=6)
    active: bool = True


class WorkerUpdate(ApiSchema):
    """Partial worker update."""

    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)
    email: str | None = None
    phone: str | None = None
    specialization: str | None = None
    worker_type: str | None = None
    password: str | None = Field(default=None, min_length=6)
    active: bool | None = None


class Worker(ApiSchema):
    """Worker (system user) record."""

    id: str
    first_name: str
    last_name: str
    username: str | None = None
    email: str | None = None
    phone: str | None = None
    specialization: str | None = None
    worker_type: str | None = None
    active: bool = Field(default=True, validation_alias=AliasChoices("active", "isActive"))
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
