"""
Agency Database Model
=====================

SQLAlchemy ORM model for federal regulatory agencies.

Version: 0.1.0
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from shared.database import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class Agency(Base):
    """
    A federal regulatory body, keyed during import by its CFR title number.

    Owns its regulations and cached analysis metrics (cascade delete).
    """

    __tablename__ = "agencies"
    __table_args__ = (
        Index("ix_agencies_title_number", "title_number"),
        Index("ix_agencies_name", "name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=False)
    short_name = Column(String(50))
    title_number = Column(Integer)
    description = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    regulations = relationship(
        "Regulation",
        back_populates="agency",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    metrics = relationship(
        "AnalysisMetric",
        back_populates="agency",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Agency {self.id}: {self.short_name or self.name} (title {self.title_number})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "title_number": self.title_number,
            "description": self.description,
        }
