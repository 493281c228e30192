"""Decision schemas.

Pros and cons are stored as lists; the decision dialog edits them as
newline-separated text.
"""

from typing import ClassVar
from uuid import UUID

from pydantic import field_validator

from devtrack.domain.forms import blank_to_none, format_form_date, join_line_list, parse_form_date, split_line_list
from devtrack.schemas.common import InputModel, PatchModel, ReadModel, RequiredText, UtcDatetime


class DecisionCreate(InputModel):
    text: RequiredText
    date: UtcDatetime | None = None  # None -> creation time
    pros: list[str] | None = None
    cons: list[str] | None = None
    alternatives: str | None = None


class DecisionUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"text", "date"})

    text: RequiredText | None = None
    date: UtcDatetime | None = None
    pros: list[str] | None = None  # None clears to []
    cons: list[str] | None = None
    alternatives: str | None = None


class DecisionForm(InputModel):
    text: RequiredText
    date: str = ""
    pros: str = ""
    cons: str = ""
    alternatives: str = ""

    @field_validator("date")
    @classmethod
    def date_parses(cls, v: str) -> str:
        parse_form_date(v)
        return v

    def to_create(self) -> DecisionCreate:
        return DecisionCreate(
            text=self.text,
            date=parse_form_date(self.date),
            pros=split_line_list(self.pros),
            cons=split_line_list(self.cons),
            alternatives=blank_to_none(self.alternatives),
        )

    def to_update(self) -> DecisionUpdate:
        patch = {
            "text": self.text,
            "pros": split_line_list(self.pros),
            "cons": split_line_list(self.cons),
            "alternatives": blank_to_none(self.alternatives),
        }
        # An empty date input keeps the stored date
        parsed = parse_form_date(self.date)
        if parsed is not None:
            patch["date"] = parsed
        return DecisionUpdate(**patch)

    @classmethod
    def from_read(cls, decision: "DecisionRead") -> "DecisionForm":
        return cls(
            text=decision.text,
            date=format_form_date(decision.date),
            pros=join_line_list(decision.pros),
            cons=join_line_list(decision.cons),
            alternatives=decision.alternatives or "",
        )


class DecisionRead(ReadModel):
    id: UUID
    feature_id: UUID
    date: UtcDatetime
    text: str
    pros: list[str]
    cons: list[str]
    alternatives: str | None
    created_at: UtcDatetime
