"""Entry points for building expectations."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from expectly.assertions import Assertion, TryAssertion, assertion_class_for
from expectly.catching import capture
from expectly.reporter import Expectation, get_reporter

T = TypeVar("T")


def expect(
    subject: T,
    block: Callable[[Assertion[T]], Any] | None = None,
    *,
    description: str = "value",
) -> Assertion[T]:
    """Start an expectation on *subject*.

    Without *block*, returns a root node: each check on it (or on nodes
    chained from it) raises as soon as it fails. With *block*, every check in
    the block runs and the expectation fails once, at the end, if any of
    them failed.
    """
    node = assertion_class_for(type(subject))(
        subject, description, expectation=Expectation(get_reporter())
    )
    if block is not None:
        return node.and_(block)
    return node


def expect_catching(action: Callable[[], T], *, description: str = "action") -> TryAssertion:
    """Run *action* once and start an expectation on its captured result."""
    return TryAssertion(
        capture(action), description, expectation=Expectation(get_reporter())
    )
