"""Cache tag names.

A tag labels one or more cached views; invalidating it makes all of them
stale. Mutations compute the tags they affect with the helpers below.
"""

from uuid import UUID

PROJECTS = "projects"  # Project list / sidebar
FEATURES = "features"  # Feature index across projects
DASHBOARD = "dashboard"


def project(project_id: UUID | str) -> str:
    return f"project:{project_id}"


def project_features(project_id: UUID | str) -> str:
    return f"project:{project_id}:features"


def feature(feature_id: UUID | str) -> str:
    return f"feature:{feature_id}"


def feature_tasks(feature_id: UUID | str) -> str:
    return f"feature:{feature_id}:tasks"


def feature_decisions(feature_id: UUID | str) -> str:
    return f"feature:{feature_id}:decisions"


def task(task_id: UUID | str) -> str:
    return f"task:{task_id}"


def decision(decision_id: UUID | str) -> str:
    return f"decision:{decision_id}"


def project_scope(project_id: UUID | str) -> list[str]:
    """Tags every descendant write touches: the project view plus the
    project-ordered list and dashboard (last_updated changed)."""
    return [PROJECTS, DASHBOARD, project(project_id)]
