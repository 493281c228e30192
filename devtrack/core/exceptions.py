from typing import Any

import pydantic


class DevTrackError(Exception):
    """Base exception for DevTrack."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DevTrackError):
    """Raised when input violates field constraints. No write has happened."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]) or "__root__",
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        return cls(f"Invalid input ({summary})", errors=errors)


class NotFoundError(DevTrackError):
    """Raised when an update/delete/rename targets a missing row."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class StorageError(DevTrackError):
    """Raised when the database or cache backend fails. Never retried."""

    pass
