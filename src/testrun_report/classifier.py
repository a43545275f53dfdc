"""
Derived facts about individual test results.
"""

from typing import List

from .models import SkipSignal, Suite, TestResult
from .text import comma_separate, render_argument_list


def has_arguments(result: TestResult) -> bool:
    return len(result.parameters) > 0


def arguments_text(result: TestResult) -> str:
    """Comma-separated, type-hinted rendering of the result's parameters."""
    return render_argument_list(result.parameters)


def has_dependent_groups(result: TestResult) -> bool:
    return len(result.method.groups_depended_upon) > 0


def dependent_groups_text(result: TestResult) -> str:
    """Comma-separated groups the method depends on, or an empty string."""
    return comma_separate(result.method.groups_depended_upon)


def has_dependent_methods(result: TestResult) -> bool:
    return len(result.method.methods_depended_upon) > 0


def dependent_methods_text(result: TestResult) -> str:
    """Comma-separated methods the method depends on, or an empty string."""
    return comma_separate(result.method.methods_depended_upon)


def was_skipped_deliberately(result: TestResult) -> bool:
    """Return True if the result's error is a skip signal rather than a failure."""
    return isinstance(result.throwable, SkipSignal)


def skip_reason(result: TestResult) -> str:
    if not was_skipped_deliberately(result):
        return ""
    return str(result.throwable)


def cause_chain(error: BaseException) -> List[BaseException]:
    """
    List every cause of ``error``, nearest first, excluding ``error`` itself.

    Args:
        error: The exception whose ``__cause__`` links are followed

    Returns:
        A (possibly empty) list of exceptions
    """
    causes: List[BaseException] = []
    seen = {id(error)}
    current = error.__cause__
    while current is not None and id(current) not in seen:
        causes.append(current)
        seen.add(id(current))
        current = current.__cause__
    return causes


def result_output(result: TestResult) -> List[str]:
    """Log lines recorded against a single result."""
    return list(result.output)


def all_output(suite: Suite) -> List[str]:
    """Every log line recorded in the suite, in result enumeration order."""
    lines: List[str] = []
    for context in suite.contexts():
        for bucket in context.buckets():
            for result in bucket.all_results():
                lines.extend(result.output)
    return lines
