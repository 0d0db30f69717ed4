"""Generic REST repository over the authenticated client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from podocare_client.core.http import ApiResponse, AuthenticatedClient
from podocare_client.shared.envelope import (
    NESTED_WITH_STATE,
    EnvelopeSpec,
    raise_for_state,
    unwrap_entity,
    unwrap_list,
)
from podocare_client.shared.exceptions import NotFoundError, RepositoryError
from podocare_client.shared.pagination import FilterValue, PaginatedResponse, PaginatedSearchParams

ModelT = TypeVar("ModelT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)
SchemaT = TypeVar("SchemaT", bound=BaseModel)

Payload = BaseModel | Mapping[str, Any]


def dump_payload(payload: Payload, *, partial: bool = False) -> dict[str, Any]:
    """Serialize a request DTO with wire (camelCase) names."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=partial)
    return dict(payload)


def with_filters(
    params: PaginatedSearchParams | None,
    **filters: FilterValue | None,
) -> PaginatedSearchParams:
    """Copy ``params`` with extra filters merged over the existing ones."""
    base = params or PaginatedSearchParams()
    return base.model_copy(update={"filters": {**base.filters, **filters}})


class ApiRepository(Generic[ModelT, CreateT, UpdateT]):
    """CRUD operations for one backend resource.

    Every failure (transport error, ``state: "error"`` body, missing payload)
    is raised as :class:`RepositoryError` carrying the backend message when
    there is one. Results are never partially valid.
    """

    endpoint: ClassVar[str]
    entity_schema: ClassVar[type[BaseModel]]
    envelope: ClassVar[EnvelopeSpec] = NESTED_WITH_STATE
    resource_label: ClassVar[str]
    entity_label: ClassVar[str]
    update_method: ClassVar[str] = "PUT"

    def __init__(self, client: AuthenticatedClient) -> None:
        self.client = client

    def _path(self, *parts: object) -> str:
        return "/".join([self.endpoint, *(str(part) for part in parts)])

    @staticmethod
    def _build_query(params: PaginatedSearchParams | None) -> list[tuple[str, str]]:
        if params is None:
            return []
        return params.to_query()

    @staticmethod
    def _raise_for_error(response: ApiResponse, fallback: str) -> None:
        if response.error is not None:
            exc_class = NotFoundError if response.status == 404 else RepositoryError
            raise exc_class(response.error or fallback, status_code=response.status or None)

    @classmethod
    def _response_body(cls, response: ApiResponse, fallback: str) -> Any:
        cls._raise_for_error(response, fallback)
        if response.data is None:
            raise RepositoryError(fallback, status_code=response.status)
        return response.data

    @staticmethod
    def _validate(schema: type[SchemaT], payload: Any, fallback: str) -> SchemaT:
        try:
            return schema.model_validate(payload)
        except ValidationError as exc:
            raise RepositoryError(fallback) from exc

    async def _get_list(
        self,
        path: str,
        params: PaginatedSearchParams | None,
        fallback: str,
    ) -> PaginatedResponse[ModelT]:
        response = await self.client.get(path, params=self._build_query(params))
        body = self._response_body(response, fallback)
        page = unwrap_list(body, self.envelope, fallback, response.status)
        items = [self._validate(self.entity_schema, item, fallback) for item in page.items]
        return PaginatedResponse[self.entity_schema](
            items=items,
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )

    async def _get_entity(
        self,
        path: str,
        fallback: str,
        schema: type[SchemaT] | None = None,
        envelope: EnvelopeSpec | None = None,
    ) -> Any:
        response = await self.client.get(path)
        body = self._response_body(response, fallback)
        payload = unwrap_entity(body, envelope or self.envelope, fallback, response.status)
        return self._validate(schema or self.entity_schema, payload, fallback)

    async def _get_collection(
        self,
        path: str,
        fallback: str,
        schema: type[SchemaT],
    ) -> list[SchemaT]:
        """Fetch an unpaginated list nested under the entity path."""
        response = await self.client.get(path)
        body = self._response_body(response, fallback)
        payload = unwrap_entity(body, self.envelope, fallback, response.status)
        if not isinstance(payload, list):
            raise RepositoryError(fallback, status_code=response.status)
        return [self._validate(schema, item, fallback) for item in payload]

    async def _send_entity(
        self,
        method: str,
        path: str,
        data: dict[str, Any],
        fallback: str,
        schema: type[SchemaT] | None = None,
    ) -> Any:
        response = await self.client.request(method, path, json=data)
        body = self._response_body(response, fallback)
        payload = unwrap_entity(body, self.envelope, fallback, response.status)
        return self._validate(schema or self.entity_schema, payload, fallback)

    async def get_all(
        self,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[ModelT]:
        """Fetch one page of the resource."""
        return await self._get_list(self.endpoint, params, f"Failed to fetch {self.resource_label}")

    async def get_by_id(self, entity_id: str) -> ModelT:
        """Fetch one entity; raises :class:`NotFoundError` on 404."""
        return await self._get_entity(self._path(entity_id), f"Failed to fetch {self.entity_label}")

    async def create(self, payload: CreateT | Mapping[str, Any]) -> ModelT:
        """Create an entity and return the server's canonical record."""
        return await self._send_entity(
            "POST",
            self.endpoint,
            dump_payload(payload),
            f"Failed to create {self.entity_label}",
        )

    async def update(self, entity_id: str, payload: UpdateT | Mapping[str, Any]) -> ModelT:
        """Send a partial update and return the updated record."""
        return await self._send_entity(
            self.update_method,
            self._path(entity_id),
            dump_payload(payload, partial=True),
            f"Failed to update {self.entity_label}",
        )

    async def delete(self, entity_id: str) -> None:
        fallback = f"Failed to delete {self.entity_label}"
        response = await self.client.delete(self._path(entity_id))
        self._raise_for_error(response, fallback)
        raise_for_state(response.data, self.envelope, response.status)
