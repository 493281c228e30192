"""Read models for cached views.

These are the payloads the UI renders; they carry progress rollups computed
at read time and are what the view cache stores (as JSON).
"""

from uuid import UUID

from pydantic import BaseModel, Field

from devtrack.domain.statuses import FeatureStatus, ProjectStatus
from devtrack.schemas.common import UtcDatetime
from devtrack.schemas.decisions import DecisionRead
from devtrack.schemas.features import FeatureRead
from devtrack.schemas.projects import ProjectRead


class ProjectSummary(BaseModel):
    """Project card: identity plus task rollup."""

    id: UUID
    name: str
    description: str
    status: ProjectStatus
    tech_stack: list[str] = Field(default_factory=list)
    last_updated: UtcDatetime
    progress: int = Field(..., ge=0, le=100)
    done_tasks: int = 0
    total_tasks: int = 0


class FeatureView(FeatureRead):
    progress: int = Field(..., ge=0, le=100)
    project_name: str | None = None


class ProjectView(ProjectRead):
    features: list[FeatureView] = Field(default_factory=list)
    progress: int = Field(..., ge=0, le=100)
    recent_decisions: list[DecisionRead] = Field(default_factory=list)


class FeatureIndexItem(BaseModel):
    id: UUID
    name: str
    status: FeatureStatus
