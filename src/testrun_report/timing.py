"""
Duration aggregation and end-time resolution for interleaved invocations.
"""

import logging
import time
from typing import Dict, Iterable, List, Optional

from .exceptions import ConsistencyError
from .models import InvokedMethod, Suite, TestContext, TestMethod, TestResult

logger = logging.getLogger(__name__)


def results_duration(results: Iterable[TestResult]) -> int:
    """Sum of ``end - start`` over the given results, in milliseconds."""
    return sum(r.end_millis - r.start_millis for r in results)


def aggregate_duration(context: TestContext) -> int:
    """
    Total elapsed time across all six result buckets of a context.

    Skipped results count too; their recorded times are used as they are.

    Args:
        context: The test context to measure

    Returns:
        Summed duration in milliseconds
    """
    return sum(results_duration(bucket.all_results()) for bucket in context.buckets())


def earliest_start(invoked_methods: Iterable[InvokedMethod], now: Optional[int] = None) -> int:
    """
    Earliest invocation timestamp, bounded above by the current time.

    An empty list yields the current time (``now`` when given).
    """
    start = now if now is not None else int(time.time() * 1000)
    for invoked in invoked_methods:
        start = min(start, invoked.timestamp)
    return start


class EndTimeIndex:
    """
    Maps each method in a suite to the end time of the context that ran it.

    A method seen in more than one place keeps its first entry: contexts in
    suite order, and within a context test methods, then passed
    configurations, then failed configurations.
    """

    def __init__(self, suite: Suite):
        self.suite_name = suite.name
        self._end_times: Dict[TestMethod, int] = {}
        for context in suite.contexts():
            for methods in (
                context.all_test_methods,
                context.passed_configurations.all_methods(),
                context.failed_configurations.all_methods(),
            ):
                for method in methods:
                    self._end_times.setdefault(method, context.end_millis)
        logger.debug("Indexed end times for %d methods in suite %s", len(self._end_times), suite.name)

    def end_time_for(self, method: TestMethod) -> Optional[int]:
        return self._end_times.get(method)

    def __contains__(self, method: object) -> bool:
        return method in self._end_times

    def __len__(self) -> int:
        return len(self._end_times)


def _next_invocation_of(target: InvokedMethod, invocations: List[InvokedMethod]) -> Optional[int]:
    found = False
    for invoked in invocations:
        if invoked is target:
            found = True
        elif found and invoked.method_id == target.method_id:
            return invoked.timestamp
    return None


def resolve_end_time(
    suite: Suite,
    target: InvokedMethod,
    invocations: List[InvokedMethod],
    index: Optional[EndTimeIndex] = None,
) -> int:
    """
    Resolve when an invocation logically finished.

    The next invocation of the same method after ``target`` in
    ``invocations`` ends it. ``invocations`` must already be in
    chronological order; it is scanned in list order and never re-sorted.
    Without a later invocation, the end time of the context that ran the
    method is used.

    Args:
        suite: Suite the invocation belongs to
        target: The invocation to resolve, by identity within ``invocations``
        invocations: Chronological list of invocations
        index: Prebuilt index for ``suite``; built on demand when omitted

    Returns:
        End timestamp in milliseconds

    Raises:
        ConsistencyError: If the method is not reachable from any context
    """
    end_time = _next_invocation_of(target, invocations)
    if end_time is not None:
        logger.debug("End of %s resolved from its next invocation", target.method_id)
        return end_time

    if index is None:
        index = EndTimeIndex(suite)
    end_time = index.end_time_for(target.test_method)
    if end_time is None:
        logger.error("No context in suite %s ran method %s", suite.name, target.method_id)
        raise ConsistencyError(target.method_id, suite.name)

    logger.debug("End of %s resolved from its context", target.method_id)
    return end_time
