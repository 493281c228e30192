"""Re-export all models so Base.metadata sees them."""

from devtrack.db.models.decision import Decision
from devtrack.db.models.feature import Feature
from devtrack.db.models.project import Project
from devtrack.db.models.task import Task

__all__ = [
    "Decision",
    "Feature",
    "Project",
    "Task",
]
