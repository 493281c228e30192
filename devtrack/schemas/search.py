"""Search result schemas."""

from pydantic import BaseModel, Field

from devtrack.schemas.features import FeatureRead
from devtrack.schemas.projects import ProjectRead


class FeatureSearchResult(FeatureRead):
    """Feature hit annotated with its owning project's name."""

    project_name: str


class SearchResults(BaseModel):
    """Project and feature hits. The two lists are independent, not ranked together."""

    projects: list[ProjectRead] = Field(default_factory=list)
    features: list[FeatureSearchResult] = Field(default_factory=list)
