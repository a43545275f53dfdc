"""
JSON reporter for suite summaries.
"""

import json

from ..results import SuiteSummary
from .base import ReportGenerator


class JSONReporter(ReportGenerator):
    """Generate JSON format for programmatic analysis."""

    def generate(self, summary: SuiteSummary) -> str:
        """Generate JSON report."""
        report = {
            "suite": summary.name,
            "summary": {
                "total_tests": summary.total_tests,
                "passed": summary.passed,
                "failed": summary.failed,
                "skipped": summary.skipped,
                "duration_ms": summary.duration_ms,
                "success": summary.success,
            },
            "tests": [
                {
                    "name": c.name,
                    "passed": c.passed,
                    "failed": c.failed,
                    "skipped": c.skipped,
                    "configuration_failures": c.configuration_failures,
                    "configuration_skips": c.configuration_skips,
                    "duration_ms": c.duration_ms,
                    "duration": c.duration_text,
                    "pass_percentage": c.pass_percentage,
                }
                for c in summary.contexts
            ],
            "groups": summary.groups,
        }

        return json.dumps(report, indent=2)
