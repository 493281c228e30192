"""Form payload helpers.

The UI submits lists as delimited text blobs (tech stack comma-separated,
pros/cons one per line) and dates as YYYY-MM-DD strings. These helpers turn
them into the shapes the core persists.
"""

from datetime import date, datetime, time, timezone


def split_delimited(value: str | None, delimiter: str) -> list[str]:
    """Split on delimiter, trim whitespace and drop empty entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(delimiter) if part.strip()]


def split_comma_list(value: str | None) -> list[str]:
    """'Next.js, Postgres ,, Redis' -> ['Next.js', 'Postgres', 'Redis']"""
    return split_delimited(value, ",")


def split_line_list(value: str | None) -> list[str]:
    """Newline-separated text area content -> list of non-blank lines."""
    if not value:
        return []
    return split_delimited(value.replace("\r\n", "\n"), "\n")


def join_comma_list(items: list[str] | None) -> str:
    return ", ".join(items or [])


def join_line_list(items: list[str] | None) -> str:
    return "\n".join(items or [])


def blank_to_none(value: str | None) -> str | None:
    """Empty or whitespace-only form inputs mean "not set"."""
    if value is None or not value.strip():
        return None
    return value.strip()


def parse_form_date(value: str | None) -> datetime | None:
    """Parse a date input (YYYY-MM-DD or full ISO timestamp) as UTC.

    Raises ValueError for malformed input.
    """
    value = blank_to_none(value)
    if value is None:
        return None
    if len(value) == 10:
        return datetime.combine(date.fromisoformat(value), time.min, tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_form_date(value: datetime | None) -> str:
    """Inverse of parse_form_date for pre-filling edit forms."""
    if value is None:
        return ""
    return value.date().isoformat()
