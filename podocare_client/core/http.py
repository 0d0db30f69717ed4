"""Authenticated HTTP client for the clinic REST API."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from time import perf_counter
from typing import Any

import httpx

from podocare_client.core.config import Settings
from podocare_client.core.metrics import observe_request

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."
NETWORK_ERROR_MESSAGE = "Network request failed"

QueryParams = Sequence[tuple[str, str]] | None


@dataclass(slots=True)
class ApiResponse:
    """Outcome of one HTTP round trip; never raised, always returned."""

    status: int
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _body_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class AuthenticatedClient:
    """Thin wrapper over ``httpx.AsyncClient`` that attaches the bearer token.

    Every call resolves to an :class:`ApiResponse`. Transport failures,
    non-2xx statuses and expired sessions are reported through
    ``ApiResponse.error`` instead of exceptions, so repositories decide how
    to surface them.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        token_provider: Callable[[], str | None] | None = None,
        on_token_expired: Callable[[], None] | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._token_provider = token_provider
        self._on_token_expired = on_token_expired
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "AuthenticatedClient":
        """Build a client from runtime settings."""
        kwargs.setdefault("token", settings.api_token)
        kwargs.setdefault("timeout", settings.request_timeout_seconds)
        return cls(settings.api_base_url, **kwargs)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def _current_token(self) -> str | None:
        if self._token_provider is not None:
            return self._token_provider()
        return self._token

    def _auth_headers(self) -> dict[str, str]:
        token = self._current_token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _handle_response(self, response: httpx.Response) -> ApiResponse:
        status = response.status_code

        if status == 401:
            logger.warning("Session rejected by %s", response.request.url)
            if self._on_token_expired is not None:
                self._on_token_expired()
            return ApiResponse(status=status, error=SESSION_EXPIRED_MESSAGE)

        if not response.is_success:
            message = f"Request failed with status {status}"
            try:
                body = response.json()
            except ValueError:
                message = response.reason_phrase or message
            else:
                message = _body_message(body) or message
            return ApiResponse(status=status, error=message)

        if not response.content:
            return ApiResponse(status=status, data=None)
        try:
            return ApiResponse(status=status, data=response.json())
        except ValueError:
            return ApiResponse(status=status, data=None)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: QueryParams = None,
        json: Any = None,
    ) -> ApiResponse:
        """Send one request and normalize the outcome."""
        started_at = perf_counter()
        status_code = 0
        logger.debug("%s %s params=%s", method, endpoint, params)
        try:
            response = await self._client.request(
                method,
                endpoint,
                params=list(params) if params else None,
                json=json,
                headers=self._auth_headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, endpoint, exc)
            return ApiResponse(status=0, error=str(exc) or NETWORK_ERROR_MESSAGE)
        else:
            status_code = response.status_code
            return self._handle_response(response)
        finally:
            observe_request(method, endpoint, status_code, perf_counter() - started_at)

    async def get(self, endpoint: str, *, params: QueryParams = None) -> ApiResponse:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any = None) -> ApiResponse:
        return await self.request("POST", endpoint, json=data)

    async def put(self, endpoint: str, data: Any = None) -> ApiResponse:
        return await self.request("PUT", endpoint, json=data)

    async def patch(self, endpoint: str, data: Any = None) -> ApiResponse:
        return await self.request("PATCH", endpoint, json=data)

    async def delete(self, endpoint: str) -> ApiResponse:
        return await self.request("DELETE", endpoint)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AuthenticatedClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
