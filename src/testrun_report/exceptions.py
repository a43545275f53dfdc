"""
Custom exceptions for the test-run report engine.
"""

from typing import Optional


class ReportEngineError(Exception):
    """Base exception for report engine errors."""

    pass


class ConsistencyError(ReportEngineError):
    """Raised when an end time cannot be resolved from the execution record."""

    def __init__(self, method_id: str, suite_name: Optional[str] = None):
        self.method_id = method_id
        self.suite_name = suite_name
        where = f" in suite '{suite_name}'" if suite_name else ""
        super().__init__(f"Could not find matching end time for method '{method_id}'{where}")


class DivisionError(ReportEngineError, ZeroDivisionError):
    """Raised when a percentage is requested for an empty category."""

    def __init__(self, numerator: int):
        self.numerator = numerator
        super().__init__(f"Cannot format percentage of {numerator} over a zero denominator")


class RecordLoadError(ReportEngineError):
    """Raised when an execution record cannot be read or is malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load execution record from {path}: {reason}")
