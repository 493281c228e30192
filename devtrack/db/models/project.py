"""Project model — top of the ownership chain."""

import uuid

from sqlalchemy import JSON, Column, DateTime, Enum, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from devtrack.db.base import Base, utcnow
from devtrack.domain.statuses import ProjectStatus, enum_values


class Project(Base):
    __tablename__ = "projects"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    status = Column(
        Enum(ProjectStatus, name="project_status", values_callable=enum_values),
        nullable=False,
        default=ProjectStatus.PLANNING,
    )
    tech_stack = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)

    # Touched by every descendant write, see devtrack.services.mutation.touch_project
    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    features = relationship(
        "Feature",
        back_populates="project",
        order_by="Feature.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
