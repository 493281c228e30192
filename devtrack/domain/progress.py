"""Deterministic progress rollups over task hierarchies.

Pure functions with no external dependencies. Progress is always recomputed
from current task state and never stored.

Rounding is round-half-up on the exact ratio: 1/3 -> 33, 2/3 -> 67,
1/8 -> 13 (12.5 rounds up). Python's round() is banker's rounding and would
give 12 for that last case, so integer arithmetic is used instead.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from devtrack.domain.statuses import TaskStatus


def _status_of(task: Any) -> str:
    if isinstance(task, Mapping):
        return task["status"]
    return task.status


def count_done(tasks: Iterable[Any]) -> int:
    """Number of tasks with status Done."""
    return sum(1 for task in tasks if _status_of(task) == TaskStatus.DONE)


def count_open(tasks: Iterable[Any]) -> int:
    """Number of tasks not yet Done."""
    return sum(1 for task in tasks if _status_of(task) != TaskStatus.DONE)


def round_half_up_percent(part: int, total: int) -> int:
    """round(100 * part / total) with halves rounded up, exact for integers."""
    if total <= 0:
        return 0
    return (200 * part + total) // (2 * total)


def progress_percentage(tasks: Iterable[Any]) -> int:
    """Compute completion percentage (0-100) from task statuses.

    Args:
        tasks: Task objects (with a ``status`` attribute) or mappings with a
            ``"status"`` key

    Returns:
        0 for an empty list, otherwise round-half-up(100 * done / total)
    """
    statuses = [_status_of(task) for task in tasks]
    if not statuses:
        return 0

    done = sum(1 for status in statuses if status == TaskStatus.DONE)
    return round_half_up_percent(done, len(statuses))


def feature_progress(feature: Any) -> int:
    """Progress of a single feature over its own tasks."""
    return progress_percentage(feature.tasks or [])


def project_tasks(project: Any) -> list[Any]:
    """Flatten all descendant tasks of a project (features must carry tasks)."""
    return [task for feature in project.features or [] for task in feature.tasks or []]


def project_progress(project: Any) -> int:
    """Progress of a project over the union of all its features' tasks."""
    return progress_percentage(project_tasks(project))
