"""
Base class for report generators.
"""

from abc import ABC, abstractmethod

from ..results import SuiteSummary


class ReportGenerator(ABC):
    """Base class for generating summary reports."""

    @abstractmethod
    def generate(self, summary: SuiteSummary) -> str:
        """
        Generate a report from a suite summary.

        Args:
            summary: SuiteSummary built from an execution record

        Returns:
            Report as a string
        """
        pass
