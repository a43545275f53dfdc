"""Shared fixtures: a small two-thread execution record."""

import json

import pytest

from testrun_report.models import (
    InvokedMethod,
    ResultStatus,
    SkipSignal,
    Suite,
    TestClass,
    TestContext,
    TestDefinition,
    TestMethod,
    TestResult,
)


@pytest.fixture
def definition():
    return TestDefinition(
        name="web",
        defects={("test_checkout", "CheckoutTest"): "BUG-42"},
        descriptions={"LoginTest": "Login & logout flows"},
    )


@pytest.fixture
def login_class(definition):
    return TestClass(name="LoginTest", group="smoke", definition=definition)


@pytest.fixture
def checkout_class(definition):
    return TestClass(name="CheckoutTest", definition=definition)


@pytest.fixture
def sample_suite(login_class, checkout_class):
    """
    Suite with two contexts.

    "login" runs setup (config) + test_login; "checkout" runs test_checkout
    (failed) and test_skip (skipped deliberately).
    """
    setup = TestMethod("setup", login_class, is_configuration=True)
    login = TestMethod("test_login", login_class, groups=["fast"])
    checkout = TestMethod(
        "test_checkout",
        checkout_class,
        methods_depended_upon=["LoginTest.test_login"],
    )
    skipped = TestMethod("test_skip", checkout_class, groups_depended_upon=["smoke"])

    login_ctx = TestContext(name="login", start_millis=1000, end_millis=2000)
    login_ctx.add_result(TestResult(setup, ResultStatus.PASS, 1000, 1100, "main@1"))
    login_ctx.add_result(
        TestResult(login, ResultStatus.PASS, 1100, 1600, "main@1", output=["logged in"])
    )

    checkout_ctx = TestContext(name="checkout", start_millis=1500, end_millis=3500)
    checkout_ctx.add_result(
        TestResult(checkout, ResultStatus.FAIL, 1500, 3000, "pool-1@7", parameters=["card", 2])
    )
    checkout_ctx.add_result(
        TestResult(
            skipped,
            ResultStatus.SKIP,
            3000,
            3000,
            "pool-1@7",
            throwable=SkipSignal("not on staging"),
        )
    )

    suite = Suite(name="nightly")
    suite.add_context(login_ctx)
    suite.add_context(checkout_ctx)
    suite.invoked_methods = [
        InvokedMethod(setup, 1000),
        InvokedMethod(login, 1100),
        InvokedMethod(checkout, 1500),
        InvokedMethod(skipped, 3000),
    ]
    return suite


@pytest.fixture
def methods(sample_suite):
    """Methods of the sample suite keyed by name."""
    found = {}
    for context in sample_suite.contexts():
        for bucket in context.buckets():
            for method in bucket.all_methods():
                found[method.name] = method
    return found


@pytest.fixture
def record_data():
    """Decoded JSON record with one grouped and one ungrouped test."""
    return {
        "suite": "nightly",
        "definitions": [
            {
                "name": "web",
                "defects": [{"method": "test_pay", "class": "PayTest", "defect": "BUG-7"}],
                "descriptions": {"LoginTest": "Login flows"},
            }
        ],
        "classes": [
            {"name": "LoginTest", "annotations": ["@Group(name=[smoke])"], "definition": "web"},
            {"name": "PayTest", "definition": "web"},
        ],
        "methods": [
            {"id": "LoginTest.setup", "name": "setup", "class": "LoginTest", "configuration": True},
            {"id": "LoginTest.test_login", "name": "test_login", "class": "LoginTest"},
            {
                "id": "PayTest.test_pay",
                "name": "test_pay",
                "class": "PayTest",
                "depends_on_methods": ["LoginTest.test_login"],
            },
        ],
        "tests": [
            {
                "name": "login",
                "start": 0,
                "end": 900,
                "video_url": "https://videos.example/login",
                "results": [
                    {"method": "LoginTest.setup", "status": "pass", "start": 0, "end": 100},
                    {
                        "method": "LoginTest.test_login",
                        "status": "pass",
                        "start": 100,
                        "end": 700,
                        "thread": "main@1",
                        "parameters": ["admin", {"char": "y"}, 3],
                        "output": ["opened page"],
                        "defect": "fixed",
                    },
                ],
            },
            {
                "name": "payments",
                "start": 100,
                "end": 2600,
                "method_video_urls": {"test_pay": "https://videos.example/pay"},
                "results": [
                    {
                        "method": "PayTest.test_pay",
                        "status": "fail",
                        "start": 200,
                        "end": 2500,
                        "thread": "pool@4",
                        "error": {
                            "type": "AssertionError",
                            "message": "declined",
                            "cause": {"type": "IOError", "message": "gateway down"},
                        },
                        "defect": "open",
                    }
                ],
            },
        ],
        "invocations": [
            {"method": "LoginTest.setup", "timestamp": 0},
            {"method": "LoginTest.test_login", "timestamp": 100},
            {"method": "PayTest.test_pay", "timestamp": 200},
        ],
    }


@pytest.fixture
def record_file(tmp_path, record_data):
    path = tmp_path / "record.json"
    path.write_text(json.dumps(record_data))
    return path
