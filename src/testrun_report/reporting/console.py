"""
Console reporter for suite summaries.
"""

import os
import sys
from typing import Optional, TextIO

from ..results import SuiteSummary
from ..text import format_duration
from .base import ReportGenerator


def color_enabled(stream: Optional[TextIO] = None) -> bool:
    """
    Decide whether escape codes should be written to ``stream``.

    ``NO_COLOR`` wins over ``FORCE_COLOR``; without either, colour follows
    whether ``stream`` (stdout by default) is a terminal.
    """
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("FORCE_COLOR", "") not in ("", "0"):
        return True
    isatty = getattr(stream or sys.stdout, "isatty", None)
    return bool(isatty and isatty())


class ConsoleReporter(ReportGenerator):
    """Generate colored console output for a suite summary."""

    def __init__(self, millis_mode: str = "remainder", color: Optional[bool] = None) -> None:
        self.millis_mode = millis_mode
        if color is None:
            color = color_enabled()
        self.GREEN, self.RED, self.YELLOW, self.RESET, self.BOLD = (
            ("\033[92m", "\033[91m", "\033[93m", "\033[0m", "\033[1m") if color else ("",) * 5
        )

    def generate(self, summary: SuiteSummary) -> str:
        """Generate console report."""
        lines = []

        lines.append(f"\n{self.BOLD}Suite: {summary.name}{self.RESET}")
        lines.append("=" * 60)

        lines.append(f"\n{self.BOLD}Summary:{self.RESET}")
        lines.append(f"  Total Tests: {summary.total_tests}")
        lines.append(f"  {self.GREEN}Passed: {summary.passed}{self.RESET}")
        lines.append(f"  {self.RED}Failed: {summary.failed}{self.RESET}")
        lines.append(f"  {self.YELLOW}Skipped: {summary.skipped}{self.RESET}")
        lines.append(f"  Duration: {format_duration(summary.duration_ms, self.millis_mode)}")

        if summary.success:
            lines.append(f"\n{self.GREEN}{self.BOLD}✓ NO FAILURES{self.RESET}")
        else:
            lines.append(f"\n{self.RED}{self.BOLD}✗ FAILURES RECORDED{self.RESET}")

        lines.append(f"\n{self.BOLD}Tests:{self.RESET}")
        for context in summary.contexts:
            symbol = f"{self.GREEN}✓{self.RESET}" if context.success else f"{self.RED}✗{self.RESET}"
            percentage = context.pass_percentage or "n/a"
            lines.append(
                f"  {symbol} {context.name}: {context.passed} passed, {context.failed} failed, "
                f"{context.skipped} skipped ({percentage}) in {context.duration_text}"
            )
            if context.configuration_failures:
                lines.append(
                    f"    {self.RED}Configuration failures: "
                    f"{context.configuration_failures}{self.RESET}"
                )

        if summary.groups:
            lines.append(f"\n{self.BOLD}Groups:{self.RESET}")
            for group, names in summary.groups.items():
                lines.append(f"  {group}: {', '.join(names)}")

        lines.append("")
        return "\n".join(lines)
