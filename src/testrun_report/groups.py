"""
Group discovery and partitioning of suite results by class-level group.
"""

import logging
from typing import Dict, List, Optional, Set

from .models import Suite, SuiteResult, TestClass

logger = logging.getLogger(__name__)

NO_GROUP = "No Group"

_GROUP_MARKER = "Group(name="


def group_from_annotations(annotations: List[str]) -> str:
    """
    Extract a group name from textual annotation renderings.

    Looks for ``Group(name=...)`` and returns the first comma-separated
    name, so ``@Group(name=[smoke, ui])`` yields ``"smoke"``. When several
    annotations match, the last one wins.

    Args:
        annotations: Annotation strings as the test framework renders them

    Returns:
        The group name, or an empty string if none is declared
    """
    group = ""
    for annotation in annotations:
        if _GROUP_MARKER not in annotation:
            continue
        value = annotation.split("=")[1]
        for ch in ")[]{}\"":
            value = value.replace(ch, "")
        group = value.split(",")[0].strip()
    return group


def class_group(test_class: TestClass) -> str:
    """Return the class's group, preferring the structured field over annotations."""
    if test_class.group is not None:
        return test_class.group
    return group_from_annotations(test_class.annotations)


def _first_group(suite_result: SuiteResult) -> Optional[str]:
    for method in suite_result.context.all_test_methods:
        group = class_group(method.test_class)
        if group:
            return group
    return None


def groups_of(suite: Suite) -> Set[str]:
    """
    Collect every distinct class-level group in the suite.

    Methods whose class declares no group contribute :data:`NO_GROUP`.
    """
    groups: Set[str] = set()
    for suite_result in suite.results.values():
        for method in suite_result.context.all_test_methods:
            groups.add(class_group(method.test_class) or NO_GROUP)
    return groups


def results_by_group(suite: Suite) -> Dict[str, List[SuiteResult]]:
    """
    Partition the suite's results by group.

    Each SuiteResult lands under the first non-empty group found among its
    test methods, in enumeration order, and is never listed twice. Results
    with no grouped method go under :data:`NO_GROUP`, which comes last.
    Only groups that received a result appear, so a group reported by
    :func:`groups_of` can be missing here when one SuiteResult spans
    several groups.

    Args:
        suite: The suite to partition

    Returns:
        Mapping of group name to SuiteResults in suite order
    """
    grouped: Dict[str, List[SuiteResult]] = {}
    ungrouped: List[SuiteResult] = []

    for suite_result in suite.results.values():
        group = _first_group(suite_result)
        if group is None:
            ungrouped.append(suite_result)
            continue
        logger.debug("Placing %s in group %s", suite_result.name, group)
        grouped.setdefault(group, []).append(suite_result)

    if ungrouped:
        logger.debug("%d results have no group", len(ungrouped))
        grouped.setdefault(NO_GROUP, []).extend(ungrouped)
    return grouped


def has_groups(suite: Suite) -> bool:
    """Return True if any test method in the suite declares a method-level group."""
    return any(
        method.groups
        for suite_result in suite.results.values()
        for method in suite_result.context.all_test_methods
    )
