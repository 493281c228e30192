"""Decision model — a recorded choice with pros/cons, owned by a Feature."""

import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from devtrack.db.base import Base, utcnow


class Decision(Base):
    __tablename__ = "decisions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    feature_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("features.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    text = Column(Text, nullable=False)
    pros = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    cons = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    alternatives = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    feature = relationship("Feature", back_populates="decisions")
