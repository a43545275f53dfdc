"""
Template-facing helper object bundling every derived-value operation.
"""

from typing import Any, Dict, List, Optional, Set

from . import annotations, classifier, groups, text, timing
from .config import ReportConfig
from .models import (
    InvokedMethod,
    ResultSet,
    Suite,
    SuiteResult,
    TestClass,
    TestContext,
    TestResult,
)


class ReportHelpers:
    """
    Derived values for report templates, bound to one ReportConfig.

    Holds no state besides the config, so one instance can serve any number
    of rendering threads.
    """

    def __init__(self, config: Optional[ReportConfig] = None):
        self.config = config or ReportConfig()

    # Durations and percentages

    def duration(self, context: TestContext) -> int:
        return timing.aggregate_duration(context)

    def format_duration(self, elapsed: int) -> str:
        return text.format_duration(elapsed, self.config.millis_mode)

    def format_elapsed(self, start_millis: int, end_millis: int) -> str:
        return text.format_elapsed(start_millis, end_millis, self.config.millis_mode)

    def format_percentage(self, numerator: int, denominator: int) -> str:
        return text.format_percentage(numerator, denominator, self.config.percentage_decimals)

    # Text

    def escape_plain(self, value: Optional[str]) -> Optional[str]:
        return text.escape_plain(value)

    def escape_display(self, value: Optional[str]) -> Optional[str]:
        return text.escape_display(value)

    def thread_name(self, thread_id: Optional[str]) -> Optional[str]:
        if not self.config.strip_thread_ids:
            return thread_id
        return text.strip_thread_name(thread_id)

    # Result facts

    def has_arguments(self, result: TestResult) -> bool:
        return classifier.has_arguments(result)

    def arguments(self, result: TestResult) -> str:
        return classifier.arguments_text(result)

    def render_argument(self, value: Any) -> str:
        return text.render_argument(value)

    def has_dependent_groups(self, result: TestResult) -> bool:
        return classifier.has_dependent_groups(result)

    def dependent_groups(self, result: TestResult) -> str:
        return classifier.dependent_groups_text(result)

    def has_dependent_methods(self, result: TestResult) -> bool:
        return classifier.has_dependent_methods(result)

    def dependent_methods(self, result: TestResult) -> str:
        return classifier.dependent_methods_text(result)

    def was_skipped_deliberately(self, result: TestResult) -> bool:
        return classifier.was_skipped_deliberately(result)

    def skip_reason(self, result: TestResult) -> str:
        return classifier.skip_reason(result)

    def causes(self, error: BaseException) -> List[BaseException]:
        return classifier.cause_chain(error)

    def output(self, result: TestResult) -> List[str]:
        return classifier.result_output(result)

    def all_output(self, suite: Suite) -> List[str]:
        return classifier.all_output(suite)

    # Groups

    def has_groups(self, suite: Suite) -> bool:
        return groups.has_groups(suite)

    def group_names(self, suite: Suite) -> Set[str]:
        return groups.groups_of(suite)

    def results_by_group(self, suite: Suite) -> Dict[str, List[SuiteResult]]:
        return groups.results_by_group(suite)

    def class_group(self, test_class: TestClass) -> str:
        return groups.class_group(test_class)

    # Timing

    def start_time(self, invoked_methods: List[InvokedMethod]) -> int:
        return timing.earliest_start(invoked_methods)

    def end_time_index(self, suite: Suite) -> timing.EndTimeIndex:
        return timing.EndTimeIndex(suite)

    def end_time(
        self,
        suite: Suite,
        invoked: InvokedMethod,
        invoked_methods: List[InvokedMethod],
        index: Optional[timing.EndTimeIndex] = None,
    ) -> int:
        return timing.resolve_end_time(suite, invoked, invoked_methods, index)

    # Annotations

    def defect_number(self, result: TestResult) -> str:
        return annotations.defect_number(result)

    def class_description(self, test_class: TestClass) -> str:
        return annotations.class_description(test_class)

    def video_url(self, context: TestContext) -> str:
        return annotations.context_video_url(context)

    def method_video_url(self, result: TestResult) -> str:
        return annotations.method_video_url(result)

    def open_defect_tests(self, suite_result: SuiteResult) -> ResultSet:
        return annotations.open_defect_tests(suite_result)

    def fixed_defect_tests(self, suite_result: SuiteResult) -> ResultSet:
        return annotations.fixed_defect_tests(suite_result)
