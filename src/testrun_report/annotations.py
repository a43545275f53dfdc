"""
Lookup of optional out-of-band annotations: defects, descriptions and videos.

None of these lookups fail; a missing annotation reads as an empty string or
an empty ResultSet.
"""

from typing import Optional

from .models import ResultSet, SuiteResult, TestClass, TestContext, TestResult


def defect_number(result: TestResult) -> str:
    """Return the defect id declared for the result's method, or ``""``."""
    method = result.method
    definition = method.test_class.definition
    if definition is None:
        return ""
    return definition.defects.get((method.name, method.test_class.name), "")


def class_description(test_class: TestClass) -> str:
    """Return the free-text description declared for a test class, or ``""``."""
    if test_class.definition is None:
        return ""
    return test_class.definition.descriptions.get(test_class.name, "")


def context_video_url(context: TestContext) -> str:
    """Video recorded for the whole context (one browser session), or ``""``."""
    return context.video_url or ""


def method_video_url(result: TestResult) -> str:
    """
    Video recorded for a method that ran in its own session, or ``""``.

    Looked up by method name on the context the result was filed into.
    """
    if result.context is None:
        return ""
    return result.context.method_video_urls.get(result.method.name, "")


def _results_in_context(registry: Optional[ResultSet], suite_result: SuiteResult) -> ResultSet:
    filtered = ResultSet()
    if registry is None:
        return filtered
    for method in suite_result.context.all_test_methods:
        for result in registry.results_for(method):
            filtered.add_result(result, method)
    return filtered


def open_defect_tests(suite_result: SuiteResult) -> ResultSet:
    """
    Results from the suite's open-defect registry that belong to this SuiteResult.

    Args:
        suite_result: SuiteResult whose test methods select the entries

    Returns:
        A new ResultSet; empty when the suite carries no open-defect registry
    """
    suite = suite_result.suite
    return _results_in_context(suite.open_defects if suite else None, suite_result)


def fixed_defect_tests(suite_result: SuiteResult) -> ResultSet:
    """Like :func:`open_defect_tests`, for the fixed-defect registry."""
    suite = suite_result.suite
    return _results_in_context(suite.fixed_defects if suite else None, suite_result)
