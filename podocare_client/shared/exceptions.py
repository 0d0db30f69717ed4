"""Custom exception hierarchy."""

from __future__ import annotations

DEFAULT_ERROR_MESSAGE = "An error occurred"


class ClientException(Exception):
    """Base client exception."""

    code = "client_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RepositoryError(ClientException):
    """Raised when a repository call cannot produce a valid result."""

    code = "repository_error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(RepositoryError):
    """Raised when the requested entity does not exist."""

    code = "not_found"


class FetchError(ClientException):
    """Raised by fetch functions handed to the pagination controller.

    Use it to reject a page the caller cannot show, e.g.::

        async def fetch(params):
            page = await repositories.patients.get_all(params)
            if not page.items and params.search:
                raise FetchError(f"No patients match {params.search!r}")
            return page

        await controller.load_data(fetch)

    The controller publishes ``exc.message`` as its ``error``.
    """

    code = "fetch_error"


def error_message(exc: BaseException, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Best human-readable message carried by an exception."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    text = str(exc)
    return text or fallback
