"""Composable, type-narrowing assertions with aggregated failure reports."""

from expectly.api import expect, expect_catching
from expectly.assertions import (
    Assertion,
    CollectionAssertion,
    ComparableAssertion,
    ExceptionAssertion,
    FailureAssertion,
    IterableAssertion,
    StringAssertion,
    SuccessAssertion,
    TryAssertion,
    assertion_class_for,
    register,
)
from expectly.catching import Failure, Success, Try, capture
from expectly.composition import AggregationRule, Collector
from expectly.errors import (
    AggregateFailed,
    CheckFailed,
    ExpectationFailed,
    ExpectationViolated,
)
from expectly.outcome import PASSED, PENDING, FailureDetail, FailureKind, Outcome, Status
from expectly.reporter import (
    Expectation,
    FailureSummary,
    Reporter,
    ReportSink,
    configure,
    get_reporter,
    set_reporter,
)

__all__ = [
    "AggregateFailed",
    "AggregationRule",
    "Assertion",
    "CheckFailed",
    "CollectionAssertion",
    "Collector",
    "ComparableAssertion",
    "ExceptionAssertion",
    "Expectation",
    "ExpectationFailed",
    "ExpectationViolated",
    "Failure",
    "FailureAssertion",
    "FailureDetail",
    "FailureKind",
    "FailureSummary",
    "IterableAssertion",
    "Outcome",
    "PASSED",
    "PENDING",
    "ReportSink",
    "Reporter",
    "Status",
    "StringAssertion",
    "Success",
    "SuccessAssertion",
    "Try",
    "TryAssertion",
    "assertion_class_for",
    "capture",
    "configure",
    "expect",
    "expect_catching",
    "get_reporter",
    "register",
    "set_reporter",
]
