"""
Regulation Import
=================

Source-to-store import pipeline and per-section reconciliation.
"""

from services.regulations_analyzer.importer.pipeline import (
    DataImporter,
    ImportReport,
    build_importer,
)
from services.regulations_analyzer.importer.reconciler import (
    ImportReconciler,
    ImportUnit,
    ReconcileAction,
    ReconcileResult,
)

__all__ = [
    "DataImporter",
    "ImportReconciler",
    "ImportReport",
    "ImportUnit",
    "ReconcileAction",
    "ReconcileResult",
    "build_importer",
]
