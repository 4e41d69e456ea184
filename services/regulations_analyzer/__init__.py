"""
Regulations Analyzer Service
============================

Imports section-level federal regulatory text, measures it and serves
per-agency analytics over a REST API.

Features:
- Live Federal Register import with synthetic fallback
- Content fingerprinting and append-only version history
- Text complexity and deregulation opportunity scoring
- Agency, regulation and analysis endpoints

Port: 3001
"""

__version__ = "0.1.0"
