"""Shared model utilities used across all models."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime (SQLite drops the offset on round-trip)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
