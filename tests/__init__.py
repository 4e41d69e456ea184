"""
Regulations Analyzer Test Suite
===============================

Test organization:
- tests/unit/        - Configuration and logging helpers
- tests/services/    - Service tests against in-memory SQLite

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=services           # With coverage
"""
