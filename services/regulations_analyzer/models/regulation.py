"""
Regulation Database Models
==========================

SQLAlchemy ORM models for section-level regulations and their
append-only version history.

Version: 0.1.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from services.regulations_analyzer.models.agency import utcnow
from shared.database import Base


class ChangeType(str, Enum):
    """Kinds of recorded regulation transitions."""

    CREATED = "created"
    MODIFIED = "modified"


@dataclass(frozen=True)
class CFRLocator:
    """Position of a regulation: owning agency plus CFR title/part/section."""

    agency_id: int
    title_number: int
    part_number: str
    section_number: str

    def __str__(self) -> str:
        return f"{self.title_number}.{self.part_number}.{self.section_number}"


class Regulation(Base):
    """
    A section of regulatory text.

    ``word_count``, ``complexity`` and ``checksum`` are derived from
    ``content`` and are only ever written together with it.
    """

    __tablename__ = "regulations"
    __table_args__ = (
        UniqueConstraint(
            "agency_id",
            "title_number",
            "part_number",
            "section_number",
            name="uq_regulations_locator",
        ),
        Index("ix_regulations_agency", "agency_id"),
        Index("ix_regulations_last_updated", "last_updated"),
        Index("ix_regulations_word_count", "word_count"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    agency_id = Column(
        Integer,
        ForeignKey("agencies.id", ondelete="CASCADE"),
        nullable=False,
    )

    # CFR locator
    title_number = Column(Integer, nullable=False)
    part_number = Column(String(50), nullable=False)
    section_number = Column(String(50), nullable=False)

    # Content and derived measurements
    content = Column(Text, nullable=False, default="")
    word_count = Column(Integer, nullable=False, default=0)
    complexity = Column(Float, nullable=False, default=0.0)
    checksum = Column(String(64), nullable=False)

    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    agency = relationship("Agency", back_populates="regulations")
    history = relationship(
        "RegulationHistory",
        back_populates="regulation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RegulationHistory.recorded_at.desc()",
    )

    @property
    def locator(self) -> CFRLocator:
        return CFRLocator(
            agency_id=self.agency_id,
            title_number=self.title_number,
            part_number=self.part_number,
            section_number=self.section_number,
        )

    @property
    def citation(self) -> str:
        """Human-readable reference, e.g. ``Part 10, Section 10.1``."""
        if self.section_number:
            return f"Part {self.part_number}, Section {self.section_number}"
        return f"Part {self.part_number}"

    def __repr__(self) -> str:
        return f"<Regulation {self.id}: {self.locator} ({self.word_count} words)>"

    def to_dict(self, include_content: bool = True) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "id": self.id,
            "agency_id": self.agency_id,
            "title_number": self.title_number,
            "part_number": self.part_number,
            "section_number": self.section_number,
            "word_count": self.word_count,
            "complexity": self.complexity,
            "checksum": self.checksum,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }
        if include_content:
            data["content"] = self.content
        return data


class RegulationHistory(Base):
    """
    Immutable snapshot of a regulation's content at a transition.

    ``created`` rows hold the initial snapshot; ``modified`` rows hold the
    snapshot that was replaced.
    """

    __tablename__ = "regulation_history"
    __table_args__ = (
        Index("ix_regulation_history_regulation", "regulation_id"),
        Index("ix_regulation_history_recorded", "recorded_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    regulation_id = Column(
        Integer,
        ForeignKey("regulations.id", ondelete="CASCADE"),
        nullable=False,
    )

    change_type = Column(
        SQLEnum(
            ChangeType,
            name="change_type",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )

    content = Column(Text, nullable=False, default="")
    word_count = Column(Integer, nullable=False, default=0)
    checksum = Column(String(64), nullable=False)

    recorded_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    regulation = relationship("Regulation", back_populates="history")

    def __repr__(self) -> str:
        return f"<RegulationHistory {self.id}: {self.regulation_id} {self.change_type.value}>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "regulation_id": self.regulation_id,
            "change_type": self.change_type.value,
            "word_count": self.word_count,
            "checksum": self.checksum,
            "recorded_at": self.recorded_at.isoformat() if self.recorded_at else None,
        }
