"""
Regulations Analyzer Routes
===========================

API route modules for the regulations analyzer service.
"""

from services.regulations_analyzer.routes import agencies, analysis, data, regulations

__all__ = ["agencies", "analysis", "data", "regulations"]
