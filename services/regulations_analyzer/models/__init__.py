"""
Regulations Analyzer Database Models
====================================

SQLAlchemy ORM models for the regulatory text store.

Tables:
- agencies: Federal regulatory bodies
- regulations: Section-level regulatory text with derived measurements
- regulation_history: Append-only content snapshots
- analysis_metrics: Cached per-agency metric values

Version: 0.1.0
"""

from services.regulations_analyzer.models.agency import Agency
from services.regulations_analyzer.models.metric import AnalysisMetric
from services.regulations_analyzer.models.regulation import (
    CFRLocator,
    ChangeType,
    Regulation,
    RegulationHistory,
)

__all__ = [
    "Agency",
    "AnalysisMetric",
    "CFRLocator",
    "ChangeType",
    "Regulation",
    "RegulationHistory",
]
