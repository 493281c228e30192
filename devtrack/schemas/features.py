"""Feature schemas."""

from typing import ClassVar
from uuid import UUID

from devtrack.domain.forms import blank_to_none
from devtrack.domain.statuses import FeatureStatus, Priority
from devtrack.schemas.common import Effort, InputModel, Name, PatchModel, ReadModel, UtcDatetime
from devtrack.schemas.decisions import DecisionRead
from devtrack.schemas.tasks import TaskRead


class FeatureCreate(InputModel):
    name: Name
    description: str = ""
    priority: Priority | None = None  # None -> Medium
    status: FeatureStatus | None = None  # None -> To Do
    effort_estimate: Effort | None = None


class FeatureUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "description", "priority", "status"})

    name: Name | None = None
    description: str | None = None
    priority: Priority | None = None
    status: FeatureStatus | None = None
    effort_estimate: Effort | None = None


class FeatureForm(InputModel):
    name: Name
    description: str = ""
    priority: Priority | None = None
    status: FeatureStatus | None = None
    effort_estimate: Effort = ""

    def to_create(self) -> FeatureCreate:
        return FeatureCreate(
            name=self.name,
            description=self.description,
            priority=self.priority,
            status=self.status,
            effort_estimate=blank_to_none(self.effort_estimate),
        )

    def to_update(self) -> FeatureUpdate:
        patch = {
            "name": self.name,
            "description": self.description,
            "effort_estimate": blank_to_none(self.effort_estimate),
        }
        if self.priority is not None:
            patch["priority"] = self.priority
        if self.status is not None:
            patch["status"] = self.status
        return FeatureUpdate(**patch)

    @classmethod
    def from_read(cls, feature: "FeatureRead") -> "FeatureForm":
        return cls(
            name=feature.name,
            description=feature.description,
            priority=feature.priority,
            status=feature.status,
            effort_estimate=feature.effort_estimate or "",
        )


class FeatureRead(ReadModel):
    id: UUID
    project_id: UUID
    name: str
    description: str
    priority: Priority
    status: FeatureStatus
    effort_estimate: str | None
    created_at: UtcDatetime

    # Populated only when requested by the query layer
    tasks: list[TaskRead] | None = None
    decisions: list[DecisionRead] | None = None
