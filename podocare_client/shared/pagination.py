"""Reusable pagination contracts and the list-page state controller."""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from podocare_client.shared.exceptions import error_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

FilterScalar = str | int | float | bool
FilterValue = FilterScalar | list[FilterScalar]

RESERVED_PARAM_KEYS = frozenset({"page", "limit", "search"})
DEFAULT_PAGE_SIZE = 15
PAGE_GAP = "..."


def _check_filter_keys(keys: Iterable[str]) -> None:
    clash = sorted(RESERVED_PARAM_KEYS.intersection(keys))
    if clash:
        raise ValueError(f"Filter keys must not shadow pagination params: {', '.join(clash)}")


def _render_query_value(value: FilterScalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class PaginatedSearchParams(BaseModel):
    """Request-side paging, search and filter params for list endpoints."""

    page: int | None = None
    limit: int | None = None
    search: str | None = None
    filters: dict[str, FilterValue | None] = Field(default_factory=dict)

    @field_validator("filters")
    @classmethod
    def reject_reserved_keys(
        cls,
        value: dict[str, FilterValue | None],
    ) -> dict[str, FilterValue | None]:
        """Keep ``page``/``limit``/``search`` out of the free-form filter bag."""
        _check_filter_keys(value)
        return value

    def to_query(self) -> list[tuple[str, str]]:
        """Build query pairs, leaving out absent or empty values."""
        pairs: list[tuple[str, str]] = []
        if self.page:
            pairs.append(("page", str(self.page)))
        if self.limit:
            pairs.append(("limit", str(self.limit)))
        if self.search:
            pairs.append(("search", self.search))

        for key, value in self.filters.items():
            if value is None:
                continue
            if isinstance(value, list):
                pairs.extend((key, _render_query_value(item)) for item in value)
            else:
                pairs.append((key, _render_query_value(value)))
        return pairs

    def flatten(self) -> dict[str, Any]:
        """Flat ``{page, limit, search?, **filters}`` view of the params."""
        flat: dict[str, Any] = {}
        if self.page is not None:
            flat["page"] = self.page
        if self.limit is not None:
            flat["limit"] = self.limit
        if self.search:
            flat["search"] = self.search
        flat.update({key: value for key, value in self.filters.items() if value is not None})
        return flat


class PaginatedResponse(BaseModel, Generic[T]):
    """Canonical page of results handed to the pagination controller."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[T]
    total: int = Field(ge=0)
    page: int
    limit: int
    total_pages: int = Field(ge=0, alias="totalPages")


def compute_total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` items, ``0`` for a non-positive limit."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def page_numbers(current_page: int, total_pages: int, max_visible: int = 7) -> list[int | str]:
    """Page buttons to render, with ``"..."`` marking skipped ranges.

    First and last pages are always present once ``total_pages`` exceeds
    ``max_visible``.
    """
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    pages: list[int | str] = [1]
    if current_page <= 4:
        pages.extend(range(2, 6))
        pages.extend([PAGE_GAP, total_pages])
    elif current_page >= total_pages - 3:
        pages.append(PAGE_GAP)
        pages.extend(range(total_pages - 4, total_pages + 1))
    else:
        pages.append(PAGE_GAP)
        pages.extend(range(current_page - 1, current_page + 2))
        pages.extend([PAGE_GAP, total_pages])
    return pages


@dataclass(frozen=True, slots=True)
class PaginationState:
    """Immutable snapshot of a controller, for renderers."""

    current_page: int
    page_size: int
    search_term: str
    filters: Mapping[str, FilterValue | None]
    data: tuple[Any, ...]
    total_items: int
    total_pages: int
    is_loading: bool
    error: str | None


FetchFunction = Callable[[PaginatedSearchParams], Awaitable[PaginatedResponse[T]]]


class PaginationController(Generic[T]):
    """Tracks paging/search/filter state for one list view and runs its fetches.

    The controller never issues requests on its own. Callers hand a fetch
    function to :meth:`load_data` every time they want a page; mutators only
    change state. Search, filter and page-size changes always send the view
    back to page 1.

    Overlapping ``load_data`` calls are not cancelled: by default whichever
    resolves last publishes its result. With ``discard_stale=True`` only the
    most recently started call may publish data, errors or clear the loading
    flag.
    """

    def __init__(
        self,
        *,
        initial_page: int = 1,
        initial_page_size: int = DEFAULT_PAGE_SIZE,
        discard_stale: bool = False,
    ) -> None:
        if initial_page < 1:
            raise ValueError(f"initial_page must be >= 1, got {initial_page}")
        if initial_page_size < 1:
            raise ValueError(f"initial_page_size must be >= 1, got {initial_page_size}")

        self._initial_page = initial_page
        self._initial_page_size = initial_page_size
        self._discard_stale = discard_stale

        self._current_page = initial_page
        self._page_size = initial_page_size
        self._search_term = ""
        self._filters: dict[str, FilterValue | None] = {}

        self._data: list[T] = []
        self._total_items = 0
        self._total_pages = 0
        self._is_loading = False
        self._error: str | None = None
        self._request_seq = 0

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def filters(self) -> dict[str, FilterValue | None]:
        return dict(self._filters)

    @property
    def data(self) -> list[T]:
        return list(self._data)

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def has_next_page(self) -> bool:
        return self._current_page < self._total_pages

    @property
    def has_previous_page(self) -> bool:
        return self._current_page > 1

    @property
    def item_range(self) -> tuple[int, int]:
        """1-based ``(first, last)`` item numbers shown on the current page."""
        if self._total_items == 0:
            return 0, 0
        start = (self._current_page - 1) * self._page_size + 1
        end = min(self._current_page * self._page_size, self._total_items)
        return start, end

    @property
    def state(self) -> PaginationState:
        return PaginationState(
            current_page=self._current_page,
            page_size=self._page_size,
            search_term=self._search_term,
            filters=dict(self._filters),
            data=tuple(self._data),
            total_items=self._total_items,
            total_pages=self._total_pages,
            is_loading=self._is_loading,
            error=self._error,
        )

    def page_numbers(self, max_visible: int = 7) -> list[int | str]:
        return page_numbers(self._current_page, self._total_pages, max_visible)

    def set_search_term(self, term: str) -> None:
        self._search_term = term
        self._current_page = 1

    def set_filters(self, filters: Mapping[str, FilterValue | None]) -> None:
        """Replace the whole filter map.

        Keys and values are validated here, so a bad filter raises
        ``ValueError`` now instead of failing a later :meth:`load_data`.
        """
        validated = PaginatedSearchParams(filters=dict(filters))
        self._filters = dict(validated.filters)
        self._current_page = 1

    def go_to_page(self, page: int) -> None:
        last_page = max(1, self._total_pages)
        self._current_page = max(1, min(int(page), last_page))

    def set_page_size(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"page size must be >= 1, got {size}")
        self._page_size = size
        self._current_page = 1

    def go_to_first_page(self) -> None:
        self.go_to_page(1)

    def go_to_last_page(self) -> None:
        self.go_to_page(self._total_pages)

    def go_to_next_page(self) -> None:
        self.go_to_page(self._current_page + 1)

    def go_to_previous_page(self) -> None:
        self.go_to_page(self._current_page - 1)

    def reset_pagination(self) -> None:
        """Return to the initial page and page size."""
        self._current_page = self._initial_page
        self._page_size = self._initial_page_size

    def refresh(self) -> None:
        """Extension point; reload by calling :meth:`load_data` again."""

    def build_params(self) -> PaginatedSearchParams:
        """Params the next :meth:`load_data` call will pass to its fetch function."""
        return PaginatedSearchParams(
            page=self._current_page,
            limit=self._page_size,
            search=self._search_term or None,
            filters=dict(self._filters),
        )

    def _is_stale(self, request_id: int) -> bool:
        return self._discard_stale and request_id != self._request_seq

    async def load_data(self, fetch_function: FetchFunction[T]) -> None:
        """Fetch the current page and publish items, totals or the error.

        Never raises for fetch failures: the message lands in :attr:`error`
        and visible data is cleared.
        """
        self._request_seq += 1
        request_id = self._request_seq
        self._is_loading = True
        self._error = None

        try:
            response = await fetch_function(self.build_params())
        except Exception as exc:
            if self._is_stale(request_id):
                return
            message = error_message(exc)
            logger.warning("Failed to load page %s: %s", self._current_page, message)
            self._error = message
            self._data = []
            self._total_items = 0
            self._total_pages = 0
        else:
            if self._is_stale(request_id):
                return
            self._data = list(response.items)
            self._total_items = response.total
            self._total_pages = response.total_pages
        finally:
            if not self._is_stale(request_id):
                self._is_loading = False
