"""
Analysis Metric Database Model
==============================

Cached per-agency metric values, replaced wholesale on every
recalculation pass.

Version: 0.1.0
"""

from typing import Any

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from services.regulations_analyzer.models.agency import utcnow
from shared.database import Base


class AnalysisMetric(Base):
    """One named metric value for one agency."""

    __tablename__ = "analysis_metrics"
    __table_args__ = (
        Index("ix_analysis_metrics_agency_name", "agency_id", "metric_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    agency_id = Column(
        Integer,
        ForeignKey("agencies.id", ondelete="CASCADE"),
        nullable=False,
    )
    metric_name = Column(String(100), nullable=False)
    metric_value = Column(Float, nullable=False)

    calculated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    agency = relationship("Agency", back_populates="metrics")

    def __repr__(self) -> str:
        return f"<AnalysisMetric {self.agency_id}: {self.metric_name}={self.metric_value}>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "agency_id": self.agency_id,
            "metric_name": self.metric_name,
            "metric_value": self.metric_value,
            "calculated_at": self.calculated_at.isoformat() if self.calculated_at else None,
        }
