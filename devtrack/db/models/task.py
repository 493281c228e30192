"""Task model — leaf of the ownership chain, drives progress rollups."""

import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from devtrack.db.base import Base, utcnow
from devtrack.domain.statuses import TaskStatus, enum_values


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    feature_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("features.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(
        Enum(TaskStatus, name="task_status", values_callable=enum_values),
        nullable=False,
        default=TaskStatus.TODO,
    )
    due_date = Column(DateTime(timezone=True), nullable=True)
    effort_estimate = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    feature = relationship("Feature", back_populates="tasks")
