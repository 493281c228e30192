"""Task schemas."""

from typing import ClassVar
from uuid import UUID

from pydantic import field_validator

from devtrack.domain.forms import blank_to_none, format_form_date, parse_form_date
from devtrack.domain.statuses import TaskStatus
from devtrack.schemas.common import Effort, InputModel, Name, PatchModel, ReadModel, UtcDatetime


class TaskCreate(InputModel):
    title: Name
    description: str = ""
    status: TaskStatus | None = None  # None -> To Do
    due_date: UtcDatetime | None = None
    effort_estimate: Effort | None = None


class TaskUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"title", "description", "status"})

    title: Name | None = None
    description: str | None = None
    status: TaskStatus | None = None
    due_date: UtcDatetime | None = None
    effort_estimate: Effort | None = None


class TaskForm(InputModel):
    """Task dialog payload: due date comes from a date input (YYYY-MM-DD)."""

    title: Name
    description: str = ""
    status: TaskStatus | None = None
    due_date: str = ""
    effort_estimate: Effort = ""

    @field_validator("due_date")
    @classmethod
    def due_date_parses(cls, v: str) -> str:
        parse_form_date(v)  # raises ValueError on malformed dates
        return v

    def to_create(self) -> TaskCreate:
        return TaskCreate(
            title=self.title,
            description=self.description,
            status=self.status,
            due_date=parse_form_date(self.due_date),
            effort_estimate=blank_to_none(self.effort_estimate),
        )

    def to_update(self) -> TaskUpdate:
        patch = {
            "title": self.title,
            "description": self.description,
            "due_date": parse_form_date(self.due_date),
            "effort_estimate": blank_to_none(self.effort_estimate),
        }
        if self.status is not None:
            patch["status"] = self.status
        return TaskUpdate(**patch)

    @classmethod
    def from_read(cls, task: "TaskRead") -> "TaskForm":
        return cls(
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=format_form_date(task.due_date),
            effort_estimate=task.effort_estimate or "",
        )


class TaskRead(ReadModel):
    id: UUID
    feature_id: UUID
    title: str
    description: str
    status: TaskStatus
    due_date: UtcDatetime | None
    effort_estimate: str | None
    created_at: UtcDatetime
