"""
Regulations Analyzer Errors
===========================

Exception taxonomy shared by the importer, sources, store and API layer.

Version: 0.1.0
"""

from dataclasses import dataclass


class AnalyzerError(Exception):
    """Base class for regulations analyzer errors."""


class SourceUnavailableError(AnalyzerError):
    """The external regulation source cannot be reached or returned nothing usable."""


class StoreError(AnalyzerError):
    """A persistence operation failed."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class UnitProcessingError(AnalyzerError):
    """A single title or part could not be processed."""

    def __init__(self, locator: str, message: str) -> None:
        self.locator = locator
        self.message = message
        super().__init__(f"{locator}: {message}")


@dataclass(frozen=True)
class UnitError:
    """Record of a failed processing unit kept in the import report."""

    locator: str
    message: str

    @classmethod
    def from_exception(cls, error: UnitProcessingError) -> "UnitError":
        return cls(locator=error.locator, message=error.message)
