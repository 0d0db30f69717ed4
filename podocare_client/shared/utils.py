"""Shared utility functions."""

from __future__ import annotations

from datetime import UTC, date, datetime


def format_date(value: date | datetime | str) -> str:
    """Render a date filter as ``YYYY-MM-DD``; strings pass through untouched."""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date().isoformat()
    return value.isoformat()
