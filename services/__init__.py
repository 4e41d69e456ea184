"""
Services
========

Application services of the federal regulations analyzer.

Services:
- regulations_analyzer: Regulation import, text metrics and analytics API
"""

__all__ = [
    "regulations_analyzer",
]
