"""
Data models for a completed test run's execution record.

The tree is Suite -> SuiteResult -> TestContext -> ResultSet -> TestResult,
with TestMethod / TestClass carrying declared metadata. Everything here is
populated once by whatever loads the record and is only read afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


class ResultStatus(Enum):
    """Outcome category of a single method invocation."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class SkipSignal(Exception):
    """Raised by a test to mark itself deliberately skipped."""

    pass


class Char(str):
    """A single-character parameter value, kept distinct from ordinary strings."""

    def __new__(cls, value: str) -> "Char":
        if len(value) != 1:
            raise ValueError(f"Char requires exactly one character, got {value!r}")
        return super().__new__(cls, value)


class RecordedError(Exception):
    """A failure rebuilt from a serialized record, keeping its original type name."""

    def __init__(self, message: str = "", error_type: str = "Exception"):
        self.error_type = error_type
        super().__init__(message)


@dataclass
class TestDefinition:
    """Declared ``<test>`` configuration that test classes belong to.

    ``defects`` is keyed by ``(method_name, class_name)`` and
    ``descriptions`` by class name.
    """

    __test__ = False

    name: str
    defects: Dict[Tuple[str, str], str] = field(default_factory=dict)
    descriptions: Dict[str, str] = field(default_factory=dict)


@dataclass(eq=False)
class TestClass:
    """A test class and its class-level metadata."""

    __test__ = False

    name: str
    group: Optional[str] = None
    # Textual renderings of class annotations, e.g. "@Group(name=[smoke])"
    annotations: List[str] = field(default_factory=list)
    definition: Optional[TestDefinition] = None


@dataclass(eq=False)
class TestMethod:
    """A test or configuration method declared on a TestClass."""

    __test__ = False

    name: str
    test_class: TestClass
    method_id: str = ""
    groups: List[str] = field(default_factory=list)
    groups_depended_upon: List[str] = field(default_factory=list)
    methods_depended_upon: List[str] = field(default_factory=list)
    is_configuration: bool = False

    def __post_init__(self) -> None:
        if not self.method_id:
            self.method_id = f"{self.test_class.name}.{self.name}"


@dataclass(eq=False)
class TestResult:
    """Record of one method invocation."""

    __test__ = False

    method: TestMethod
    status: ResultStatus
    start_millis: int
    end_millis: int
    thread_id: Optional[str] = None
    parameters: List[Any] = field(default_factory=list)
    throwable: Optional[BaseException] = None
    output: List[str] = field(default_factory=list)
    context: Optional["TestContext"] = field(default=None, repr=False)

    @property
    def test_class(self) -> TestClass:
        return self.method.test_class

    @property
    def duration_millis(self) -> int:
        return self.end_millis - self.start_millis


class ResultSet:
    """Results sharing one outcome category, grouped by the method that produced them."""

    def __init__(self, results: Optional[List[TestResult]] = None):
        self._results: Dict[TestMethod, List[TestResult]] = {}
        for result in results or []:
            self.add_result(result)

    def add_result(self, result: TestResult, method: Optional[TestMethod] = None) -> None:
        """Add a result, filed under ``method`` or the result's own method."""
        self._results.setdefault(method or result.method, []).append(result)

    def all_results(self) -> List[TestResult]:
        return [r for results in self._results.values() for r in results]

    def all_methods(self) -> List[TestMethod]:
        return list(self._results)

    def results_for(self, method: TestMethod) -> List[TestResult]:
        return list(self._results.get(method, []))

    def __contains__(self, method: object) -> bool:
        return method in self._results

    def __iter__(self) -> Iterator[TestResult]:
        return iter(self.all_results())

    def __len__(self) -> int:
        return sum(len(results) for results in self._results.values())

    def __repr__(self) -> str:
        return f"ResultSet(methods={len(self._results)}, results={len(self)})"


@dataclass(eq=False)
class TestContext:
    """Execution record of one ``<test>`` unit."""

    __test__ = False

    name: str
    start_millis: int = 0
    end_millis: int = 0
    passed_tests: ResultSet = field(default_factory=ResultSet)
    failed_tests: ResultSet = field(default_factory=ResultSet)
    skipped_tests: ResultSet = field(default_factory=ResultSet)
    passed_configurations: ResultSet = field(default_factory=ResultSet)
    failed_configurations: ResultSet = field(default_factory=ResultSet)
    skipped_configurations: ResultSet = field(default_factory=ResultSet)
    # Test methods in the order the framework enumerates them
    all_test_methods: List[TestMethod] = field(default_factory=list)
    video_url: Optional[str] = None
    method_video_urls: Dict[str, str] = field(default_factory=dict)

    def buckets(self) -> List[ResultSet]:
        """Return all six result buckets, configurations before tests per outcome."""
        return [
            self.passed_configurations,
            self.passed_tests,
            self.skipped_configurations,
            self.skipped_tests,
            self.failed_configurations,
            self.failed_tests,
        ]

    def bucket_for(self, status: ResultStatus, configuration: bool = False) -> ResultSet:
        if status == ResultStatus.PASS:
            return self.passed_configurations if configuration else self.passed_tests
        if status == ResultStatus.FAIL:
            return self.failed_configurations if configuration else self.failed_tests
        return self.skipped_configurations if configuration else self.skipped_tests

    def add_result(self, result: TestResult) -> None:
        """File a result into the bucket matching its status and method kind."""
        method = result.method
        result.context = self
        self.bucket_for(result.status, method.is_configuration).add_result(result)
        if not method.is_configuration and not any(m is method for m in self.all_test_methods):
            self.all_test_methods.append(method)


@dataclass(eq=False)
class InvokedMethod:
    """A method paired with the time it was invoked."""

    test_method: TestMethod
    timestamp: int

    @property
    def method_id(self) -> str:
        return self.test_method.method_id


@dataclass(eq=False)
class SuiteResult:
    """Result of running one named test unit within a suite."""

    context: TestContext
    suite: Optional["Suite"] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return self.context.name


@dataclass
class Suite:
    """Top-level record of one test run."""

    name: str
    results: Dict[str, SuiteResult] = field(default_factory=dict)
    # Chronological list of every invocation across all threads
    invoked_methods: List[InvokedMethod] = field(default_factory=list)
    open_defects: Optional[ResultSet] = None
    fixed_defects: Optional[ResultSet] = None

    def add_context(self, context: TestContext) -> SuiteResult:
        suite_result = SuiteResult(context=context, suite=self)
        self.results[context.name] = suite_result
        return suite_result

    def contexts(self) -> List[TestContext]:
        return [r.context for r in self.results.values()]
