"""
Loading an execution record from a JSON dump of a completed run.

Record layout::

    {
      "suite": "nightly",
      "definitions": [{"name": "web", "defects": [{"method": "login",
                       "class": "LoginTest", "defect": "BUG-12"}],
                       "descriptions": {"LoginTest": "Login flows"}}],
      "classes": [{"name": "LoginTest", "group": "smoke", "annotations": [],
                   "definition": "web"}],
      "methods": [{"id": "LoginTest.login", "name": "login", "class": "LoginTest",
                   "groups": [], "depends_on_groups": [], "depends_on_methods": [],
                   "configuration": false}],
      "tests": [{"name": "web", "start": 0, "end": 900, "video_url": null,
                 "method_video_urls": {},
                 "results": [{"method": "LoginTest.login", "status": "pass",
                              "start": 10, "end": 250, "thread": "main@1",
                              "parameters": ["admin", {"char": "x"}, 3],
                              "error": null, "output": [], "defect": null}]}],
      "invocations": [{"method": "LoginTest.login", "timestamp": 10}]
    }

``error`` is ``{"type": "skip" | <name>, "message": str, "cause": error | null}``
and ``defect`` is ``"open"``, ``"fixed"`` or null.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from .exceptions import RecordLoadError
from .models import (
    Char,
    InvokedMethod,
    RecordedError,
    ResultSet,
    ResultStatus,
    SkipSignal,
    Suite,
    TestClass,
    TestContext,
    TestDefinition,
    TestMethod,
    TestResult,
)

logger = logging.getLogger(__name__)


def _parse_error(data: Optional[Dict[str, Any]]) -> Optional[BaseException]:
    if not data:
        return None
    message = data.get("message", "")
    error_type = data.get("type", "Exception")
    error: BaseException
    if error_type == "skip":
        error = SkipSignal(message)
    else:
        error = RecordedError(message, error_type)
    error.__cause__ = _parse_error(data.get("cause"))
    return error


def _parse_parameter(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == {"char"}:
        return Char(value["char"])
    return value


def _parse_definitions(data: List[Dict[str, Any]]) -> Dict[str, TestDefinition]:
    definitions: Dict[str, TestDefinition] = {}
    for item in data:
        definition = TestDefinition(
            name=item["name"],
            descriptions=dict(item.get("descriptions", {})),
        )
        for defect in item.get("defects", []):
            definition.defects[(defect["method"], defect["class"])] = defect["defect"]
        definitions[definition.name] = definition
    return definitions


def _parse_classes(
    data: List[Dict[str, Any]], definitions: Dict[str, TestDefinition]
) -> Dict[str, TestClass]:
    classes: Dict[str, TestClass] = {}
    for item in data:
        definition_name = item.get("definition")
        classes[item["name"]] = TestClass(
            name=item["name"],
            group=item.get("group"),
            annotations=list(item.get("annotations", [])),
            definition=definitions[definition_name] if definition_name else None,
        )
    return classes


def _parse_methods(
    data: List[Dict[str, Any]], classes: Dict[str, TestClass]
) -> Dict[str, TestMethod]:
    methods: Dict[str, TestMethod] = {}
    for item in data:
        method = TestMethod(
            name=item["name"],
            test_class=classes[item["class"]],
            method_id=item.get("id", ""),
            groups=list(item.get("groups", [])),
            groups_depended_upon=list(item.get("depends_on_groups", [])),
            methods_depended_upon=list(item.get("depends_on_methods", [])),
            is_configuration=bool(item.get("configuration", False)),
        )
        methods[method.method_id] = method
    return methods


def parse_record(data: Dict[str, Any], source: str = "<record>") -> Suite:
    """
    Build a Suite from a decoded record.

    Args:
        data: Decoded JSON record
        source: Name used in error messages

    Returns:
        The populated Suite

    Raises:
        RecordLoadError: If the record is missing fields or refers to unknown entries
    """
    try:
        definitions = _parse_definitions(data.get("definitions", []))
        classes = _parse_classes(data.get("classes", []), definitions)
        methods = _parse_methods(data.get("methods", []), classes)

        suite = Suite(name=data["suite"])
        defects = {"open": ResultSet(), "fixed": ResultSet()}
        seen_defects = set()

        for test in data.get("tests", []):
            context = TestContext(
                name=test["name"],
                start_millis=int(test.get("start", 0)),
                end_millis=int(test.get("end", 0)),
                video_url=test.get("video_url"),
                method_video_urls=dict(test.get("method_video_urls", {})),
            )
            for item in test.get("results", []):
                result = TestResult(
                    method=methods[item["method"]],
                    status=ResultStatus(item["status"]),
                    start_millis=int(item["start"]),
                    end_millis=int(item["end"]),
                    thread_id=item.get("thread"),
                    parameters=[_parse_parameter(p) for p in item.get("parameters", [])],
                    throwable=_parse_error(item.get("error")),
                    output=list(item.get("output", [])),
                )
                context.add_result(result)
                defect = item.get("defect")
                if defect:
                    defects[defect].add_result(result)
                    seen_defects.add(defect)
            suite.add_context(context)

        suite.invoked_methods = [
            InvokedMethod(test_method=methods[item["method"]], timestamp=int(item["timestamp"]))
            for item in data.get("invocations", [])
        ]
    except KeyError as e:
        raise RecordLoadError(source, f"missing or unknown entry {e}")
    except (TypeError, ValueError, AttributeError) as e:
        raise RecordLoadError(source, str(e))

    # A registry only exists when at least one result was tagged for it
    if "open" in seen_defects:
        suite.open_defects = defects["open"]
    if "fixed" in seen_defects:
        suite.fixed_defects = defects["fixed"]

    logger.debug(
        "Parsed record %s: %d tests, %d methods, %d invocations",
        source,
        len(suite.results),
        len(methods),
        len(suite.invoked_methods),
    )
    return suite


def load_record(path: str) -> Suite:
    """
    Read and parse an execution record file.

    Raises:
        FileNotFoundError: If the file does not exist
        RecordLoadError: If the file is unreadable, not JSON, or malformed
    """
    logger.info("Loading execution record from %s", path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Execution record not found: {path}")
    except json.JSONDecodeError as e:
        raise RecordLoadError(path, f"invalid JSON: {e}")
    except OSError as e:
        raise RecordLoadError(path, str(e))

    if not isinstance(data, dict):
        raise RecordLoadError(path, f"expected a JSON object, got {type(data).__name__}")
    return parse_record(data, source=path)
