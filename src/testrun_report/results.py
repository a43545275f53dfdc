"""
Result aggregation into per-context and per-suite summaries.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import ReportConfig
from .groups import results_by_group
from .models import Suite, TestContext
from .text import format_duration, format_percentage
from .timing import aggregate_duration


@dataclass
class ContextSummary:
    """Counts and timings for one test context."""

    name: str
    passed: int
    failed: int
    skipped: int
    configuration_failures: int
    configuration_skips: int
    duration_ms: int
    duration_text: str
    pass_percentage: Optional[str] = None

    @property
    def total_tests(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def success(self) -> bool:
        """Return True if no test or configuration method failed."""
        return self.failed == 0 and self.configuration_failures == 0


@dataclass
class SuiteSummary:
    """Aggregated summary of every context in a suite."""

    name: str
    contexts: List[ContextSummary]
    groups: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def passed(self) -> int:
        return sum(c.passed for c in self.contexts)

    @property
    def failed(self) -> int:
        return sum(c.failed for c in self.contexts)

    @property
    def skipped(self) -> int:
        return sum(c.skipped for c in self.contexts)

    @property
    def total_tests(self) -> int:
        return sum(c.total_tests for c in self.contexts)

    @property
    def duration_ms(self) -> int:
        return sum(c.duration_ms for c in self.contexts)

    @property
    def success(self) -> bool:
        return all(c.success for c in self.contexts)


def summarize_context(context: TestContext, config: Optional[ReportConfig] = None) -> ContextSummary:
    """
    Aggregate one context's buckets into a summary.

    Args:
        context: TestContext to summarize
        config: Display settings (defaults apply when omitted)

    Returns:
        ContextSummary; ``pass_percentage`` is None when no tests ran
    """
    config = config or ReportConfig()
    passed = len(context.passed_tests)
    failed = len(context.failed_tests)
    skipped = len(context.skipped_tests)
    total = passed + failed + skipped
    duration = aggregate_duration(context)

    return ContextSummary(
        name=context.name,
        passed=passed,
        failed=failed,
        skipped=skipped,
        configuration_failures=len(context.failed_configurations),
        configuration_skips=len(context.skipped_configurations),
        duration_ms=duration,
        duration_text=format_duration(duration, config.millis_mode),
        # Zero-count contexts have no meaningful percentage
        pass_percentage=(
            format_percentage(passed, total, config.percentage_decimals) if total else None
        ),
    )


def summarize_suite(suite: Suite, config: Optional[ReportConfig] = None) -> SuiteSummary:
    """Summarize every context in a suite and record its group partition."""
    contexts = [summarize_context(context, config) for context in suite.contexts()]
    groups = {
        group: [suite_result.name for suite_result in suite_results]
        for group, suite_results in results_by_group(suite).items()
    }
    return SuiteSummary(name=suite.name, contexts=contexts, groups=groups)
