"""Per-resource response envelope descriptions and unwrapping."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

from podocare_client.core.enums import EnvelopeStateEnum
from podocare_client.shared.exceptions import RepositoryError
from podocare_client.shared.pagination import PaginatedResponse, compute_total_pages


class EnvelopeSpec(BaseModel):
    """How one backend resource wraps its payload.

    ``data_path`` leads from the response body to the list payload holding
    ``items_key``, ``total``, ``page`` and ``limit``. ``total_pages_key`` names
    a server-supplied page count; when unset, or absent from a response, the
    count is computed from ``total`` and ``limit``. ``state_key`` names the
    success/error discriminator for resources that send one.
    """

    model_config = ConfigDict(frozen=True)

    data_path: tuple[str, ...] = ("data",)
    items_key: str = "data"
    total_pages_key: str | None = None
    state_key: str | None = "state"
    entity_path: tuple[str, ...] = ("data",)


# {state, message, data: {data: [...], total, page, limit}}
NESTED_WITH_STATE = EnvelopeSpec()
# {data: {data: [...], total, page, limit}}
NESTED = EnvelopeSpec(state_key=None)
# {data: [...], total, page, limit}
FLAT = EnvelopeSpec(data_path=(), state_key=None, entity_path=())
# {data: {data: [...], total, page, limit, totalPages}}
NESTED_SERVER_PAGES = EnvelopeSpec(state_key=None, total_pages_key="totalPages")


def raise_for_state(body: Any, spec: EnvelopeSpec, status_code: int | None = None) -> None:
    """Raise when a 2xx body carries an error discriminator."""
    if spec.state_key is None or not isinstance(body, dict):
        return
    if body.get(spec.state_key) != EnvelopeStateEnum.ERROR:
        return
    message = body.get("message")
    if not isinstance(message, str) or not message:
        message = "Request was rejected by the server"
    raise RepositoryError(message, status_code=status_code)


def _descend(body: Any, path: Sequence[str], fallback: str, status_code: int | None) -> Any:
    current = body
    for key in path:
        if not isinstance(current, dict) or current.get(key) is None:
            raise RepositoryError(fallback, status_code=status_code)
        current = current[key]
    return current


def _as_int(payload: dict[str, Any], key: str, fallback: str, status_code: int | None) -> int:
    try:
        return int(payload[key])
    except (KeyError, TypeError, ValueError) as exc:
        raise RepositoryError(fallback, status_code=status_code) from exc


def unwrap_list(
    body: Any,
    spec: EnvelopeSpec,
    fallback: str,
    status_code: int | None = None,
) -> PaginatedResponse[dict[str, Any]]:
    """Turn a list response body into the canonical page shape."""
    raise_for_state(body, spec, status_code)
    payload = _descend(body, spec.data_path, fallback, status_code)
    if not isinstance(payload, dict):
        raise RepositoryError(fallback, status_code=status_code)

    items = payload.get(spec.items_key)
    if not isinstance(items, list):
        raise RepositoryError(fallback, status_code=status_code)

    total = _as_int(payload, "total", fallback, status_code)
    page = _as_int(payload, "page", fallback, status_code)
    limit = _as_int(payload, "limit", fallback, status_code)

    if spec.total_pages_key is not None and payload.get(spec.total_pages_key) is not None:
        total_pages = _as_int(payload, spec.total_pages_key, fallback, status_code)
    else:
        total_pages = compute_total_pages(total, limit)

    try:
        return PaginatedResponse[dict[str, Any]](
            items=items,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
        )
    except ValueError as exc:
        raise RepositoryError(fallback, status_code=status_code) from exc


def unwrap_entity(
    body: Any,
    spec: EnvelopeSpec,
    fallback: str,
    status_code: int | None = None,
) -> Any:
    """Return the single-entity payload of a response body."""
    raise_for_state(body, spec, status_code)
    return _descend(body, spec.entity_path, fallback, status_code)
