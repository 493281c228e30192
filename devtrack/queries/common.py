"""Helpers shared by the read accessors."""

from typing import Any
from uuid import UUID

from sqlalchemy import inspect


def parse_uuid(value: UUID | str) -> UUID | None:
    """Coerce an identifier for a read. Malformed ids simply match nothing."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def column_values(row: Any) -> dict[str, Any]:
    """Mapped column attributes of an ORM row, without touching relationships."""
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}
