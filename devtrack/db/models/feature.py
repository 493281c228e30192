"""Feature model — owned by a Project, owns Tasks and Decisions."""

import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from devtrack.db.base import Base, utcnow
from devtrack.domain.statuses import FeatureStatus, Priority, enum_values


class Feature(Base):
    __tablename__ = "features"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    priority = Column(
        Enum(Priority, name="priority", values_callable=enum_values),
        nullable=False,
        default=Priority.MEDIUM,
    )
    status = Column(
        Enum(FeatureStatus, name="feature_status", values_callable=enum_values),
        nullable=False,
        default=FeatureStatus.TODO,
    )
    effort_estimate = Column(String(50), nullable=True)  # Free text, e.g. "3d", "M"

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    project = relationship("Project", back_populates="features")
    tasks = relationship(
        "Task",
        back_populates="feature",
        order_by="Task.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    decisions = relationship(
        "Decision",
        back_populates="feature",
        order_by="Decision.date.desc()",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
