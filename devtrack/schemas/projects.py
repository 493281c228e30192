"""Project schemas: create/patch payloads, form boundary and read models."""

from typing import ClassVar
from uuid import UUID

from pydantic import Field

from devtrack.domain.forms import join_comma_list, split_comma_list
from devtrack.domain.statuses import ProjectStatus
from devtrack.schemas.common import InputModel, Name, PatchModel, ReadModel, UtcDatetime
from devtrack.schemas.features import FeatureRead


class ProjectCreate(InputModel):
    name: Name
    description: str = ""
    status: ProjectStatus | None = None  # None -> Planning
    tech_stack: list[str] = Field(default_factory=list)


class ProjectUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "description", "status", "tech_stack"})

    name: Name | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    tech_stack: list[str] | None = None


class ProjectForm(InputModel):
    """Project dialog payload: tech stack arrives as a comma-separated string."""

    name: Name
    description: str = ""
    status: ProjectStatus | None = None
    tech_stack: str = ""

    def to_create(self) -> ProjectCreate:
        return ProjectCreate(
            name=self.name,
            description=self.description,
            status=self.status,
            tech_stack=split_comma_list(self.tech_stack),
        )

    def to_update(self) -> ProjectUpdate:
        patch = {
            "name": self.name,
            "description": self.description,
            "tech_stack": split_comma_list(self.tech_stack),
        }
        if self.status is not None:
            patch["status"] = self.status
        return ProjectUpdate(**patch)

    @classmethod
    def from_read(cls, project: "ProjectRead") -> "ProjectForm":
        """Pre-fill an edit dialog from a stored project."""
        return cls(
            name=project.name,
            description=project.description,
            status=project.status,
            tech_stack=join_comma_list(project.tech_stack),
        )


class ProjectRead(ReadModel):
    id: UUID
    name: str
    description: str
    status: ProjectStatus
    tech_stack: list[str]
    last_updated: UtcDatetime
    created_at: UtcDatetime

    # Populated only when requested by the query layer
    features: list[FeatureRead] | None = None
