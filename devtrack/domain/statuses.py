"""Status and priority enums shared by models, schemas and rollups.

Values are the display strings stored in the database.
"""

from enum import StrEnum


class ProjectStatus(StrEnum):
    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    LAUNCHED = "Launched"
    ARCHIVED = "Archived"


class FeatureStatus(StrEnum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TaskStatus(StrEnum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def enum_values(enum_cls: type[StrEnum]) -> list[str]:
    """Database values for an enum column (the display strings, not member names)."""
    return [member.value for member in enum_cls]
