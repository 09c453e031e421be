"""Helpers for decoding Supabase row values."""

from datetime import UTC, date, datetime
from uuid import UUID

UNIQUE_VIOLATION = "23505"


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp column into an aware datetime."""
    if not isinstance(value, str) or not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_required_timestamp(value: object) -> datetime:
    return parse_timestamp(value) or datetime.min.replace(tzinfo=UTC)


def parse_date(value: object) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_optional_uuid(value: object) -> UUID | None:
    return UUID(str(value)) if value else None


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
