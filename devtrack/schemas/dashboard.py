"""Dashboard schemas.

Per-user totals shown on the landing page. All list fields default to empty
arrays (never null).
"""

from pydantic import BaseModel, Field

from devtrack.schemas.views import ProjectSummary


class DashboardResponse(BaseModel):
    """Aggregate counts plus project cards."""

    total_projects: int = Field(..., ge=0, description="All projects")
    active_projects: int = Field(..., ge=0, description="Projects with status In Progress")
    total_features: int = Field(..., ge=0, description="Features across all projects")
    total_tasks: int = Field(..., ge=0, description="Tasks across all projects")
    open_tasks: int = Field(..., ge=0, description="Tasks not yet Done")
    current_project: ProjectSummary | None = Field(
        None, description="Most recently updated In Progress project"
    )
    projects: list[ProjectSummary] = Field(default_factory=list, description="Project cards, newest first")
