"""Shared pydantic building blocks for entity schemas."""

from datetime import datetime, timezone
from typing import Annotated, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints, model_validator

from devtrack.core.constants import EFFORT_MAX_LENGTH, NAME_MAX_LENGTH


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo) and convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]

# Required display names / titles: trimmed, non-empty, column-sized
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)]

# Free-text effort estimate ("2d", "M", "~4h")
Effort = Annotated[str, StringConstraints(strip_whitespace=True, max_length=EFFORT_MAX_LENGTH)]

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class InputModel(BaseModel):
    """Base for create payloads: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class PatchModel(InputModel):
    """Base for partial updates.

    Every field defaults to None; only fields present in ``model_fields_set``
    are applied. Fields listed in ``non_nullable`` may be omitted but not
    explicitly set to None.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulled = sorted(
            field for field in self.model_fields_set
            if field in self.non_nullable and getattr(self, field) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> dict:
        """The field mask as a dict: only explicitly provided fields."""
        return {field: getattr(self, field) for field in self.model_fields_set}


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
