"""Tests for aggregation rules, collectors and nested blocks."""

import pytest

from expectly import (
    PASSED,
    PENDING,
    AggregateFailed,
    AggregationRule,
    Assertion,
    Collector,
    FailureDetail,
    FailureKind,
    Outcome,
    StringAssertion,
    expect,
)


@pytest.mark.parametrize(
    "rule, pass_count, failure_count, satisfied",
    [
        (AggregationRule.ALL, 0, 0, True),
        (AggregationRule.ALL, 3, 0, True),
        (AggregationRule.ALL, 2, 1, False),
        (AggregationRule.ANY, 0, 0, False),
        (AggregationRule.ANY, 1, 2, True),
        (AggregationRule.ANY, 0, 3, False),
        (AggregationRule.NONE, 0, 0, True),
        (AggregationRule.NONE, 0, 3, True),
        (AggregationRule.NONE, 1, 2, False),
    ],
)
def test_rule_is_satisfied(rule, pass_count, failure_count, satisfied):
    assert rule.is_satisfied(pass_count, failure_count) is satisfied


def _failed(description: str) -> Outcome:
    return Outcome.failure(FailureDetail(kind=FailureKind.CHECK, description=description))


# --- Collector ---


def test_collector_folds_failed_children_into_causes():
    collector = Collector(AggregationRule.ALL)
    collector.record(Assertion("a", "first", outcome=PASSED))
    collector.record(Assertion("b", "second", outcome=_failed("second")))

    outcome = collector.fold("block", ["a", "b"])

    assert outcome.failed
    detail = outcome.detail
    assert detail.kind is FailureKind.AGGREGATE
    assert detail.rule is AggregationRule.ALL
    assert (detail.pass_count, detail.failure_count) == (1, 1)
    assert [c.description for c in detail.causes] == ["second"]


def test_collector_rejects_pending_nodes():
    collector = Collector(AggregationRule.ALL)
    with pytest.raises(ValueError, match="pending"):
        collector.record(Assertion("a", "unchecked", outcome=PENDING))


def test_collector_folds_only_once():
    collector = Collector(AggregationRule.ANY)
    collector.record(Assertion("a", "first", outcome=PASSED))
    assert collector.fold("block", "a") is PASSED
    with pytest.raises(RuntimeError, match="already been folded"):
        collector.fold("block", "a")


def test_collector_rejects_records_after_fold():
    collector = Collector(AggregationRule.ALL)
    collector.fold("block", None)
    with pytest.raises(RuntimeError):
        collector.record(Assertion("a", "late", outcome=PASSED))


# --- nested ---


def test_nested_any_passes_when_one_check_passes():
    expect(5).nested(
        "is big or odd",
        AggregationRule.ANY,
        lambda it: (it.is_greater_than(10), it.satisfies("is odd", lambda n: n % 2)),
    )


def test_nested_none_fails_when_a_check_passes():
    with pytest.raises(AggregateFailed) as exc_info:
        expect(5).nested(
            "is neither big nor odd",
            AggregationRule.NONE,
            lambda it: (it.is_greater_than(10), it.satisfies("is odd", lambda n: n % 2)),
        )
    error = exc_info.value
    assert (error.assertion_count, error.pass_count, error.failure_count) == (2, 1, 1)


@pytest.mark.parametrize(
    "rule, passes",
    [(AggregationRule.ALL, True), (AggregationRule.ANY, False), (AggregationRule.NONE, True)],
)
def test_empty_block(rule, passes):
    if passes:
        node = expect(1).nested("nothing", rule, lambda it: None)
        assert node.outcome.passed
    else:
        with pytest.raises(AggregateFailed):
            expect(1).nested("nothing", rule, lambda it: None)


def test_nested_with_transformed_subject():
    received = []

    def block(it):
        received.append(it)
        it.has_length(7)

    node = expect({"name": "covfefe"}).nested(
        "name", AggregationRule.ALL, block, subject="covfefe"
    )
    assert isinstance(received[0], StringAssertion)
    assert received[0].subject == "covfefe"
    assert node.subject == "covfefe"
    assert node.outcome.passed


def test_all_siblings_run_after_a_failure():
    ran = []

    def block(it):
        it.is_upper_case()
        ran.append("second")
        it.starts_with("x")
        ran.append("third")

    with pytest.raises(AggregateFailed) as exc_info:
        expect("covfefe", block)
    assert ran == ["second", "third"]
    assert exc_info.value.failure_count == 2


def test_exceptions_from_block_code_propagate():
    with pytest.raises(ZeroDivisionError):
        expect(1).and_(lambda it: 1 / 0)


def test_nested_on_failed_node_is_skipped():
    ran = []

    def outer(it):
        it.is_a(str).and_(lambda inner: ran.append(inner))

    with pytest.raises(AggregateFailed) as exc_info:
        expect(1, outer)
    assert ran == []
    assert exc_info.value.assertion_count == 1


def test_composite_outcome_is_set_once():
    node = expect("covfefe").and_(lambda it: it.is_lower_case())
    with pytest.raises(RuntimeError, match="already settled"):
        node._settle(PASSED)


def test_block_form_returns_passed_composite():
    node = expect("covfefe", lambda it: (it.is_lower_case(), it.has_length(7)))
    assert node.outcome.passed
    assert node.description == "satisfies all of"
    assert len(node.children.nodes) == 2
