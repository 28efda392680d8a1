"""Assertion nodes, the node registry, and the checks available on every subject."""

from __future__ import annotations

import types
import typing
import weakref
from typing import Any, Callable, Generic, TypeVar

from expectly.composition import AggregationRule, Collector
from expectly.outcome import (
    PASSED,
    PENDING,
    _UNSET,
    FailureDetail,
    FailureKind,
    Outcome,
    short_repr,
)
from expectly.reporter import Expectation, get_reporter

T = TypeVar("T")
U = TypeVar("U")

_REGISTRY: dict[type, type[Assertion[Any]]] = {}


def register(*subject_types: type) -> Callable[[type[Assertion[Any]]], type[Assertion[Any]]]:
    """Class decorator making a node class the provider of checks for *subject_types*."""

    def decorator(cls: type[Assertion[Any]]) -> type[Assertion[Any]]:
        for subject_type in subject_types:
            _REGISTRY[subject_type] = cls
        return cls

    return decorator


def assertion_class_for(subject_type: Any) -> type[Assertion[Any]]:
    """Return the node class registered for the most specific base of *subject_type*.

    Abstract base classes (``collections.abc.Iterable`` and friends) take part
    in the lookup, so ``list`` resolves to the class registered for
    ``Collection`` unless something more specific is registered.
    """
    subject_type = typing.get_origin(subject_type) or subject_type
    if not isinstance(subject_type, type):
        raise ValueError(f"Cannot look up assertions for non-type {subject_type!r}")

    best: tuple[type, type[Assertion[Any]]] | None = None
    for registered, cls in _REGISTRY.items():
        if not issubclass(subject_type, registered):
            continue
        if best is None or issubclass(registered, best[0]):
            best = (registered, cls)

    if best is None:
        raise ValueError(
            f"No assertions registered for {subject_type.__name__!r}. "
            f"Registered: {', '.join(sorted(t.__name__ for t in _REGISTRY))}"
        )
    return best[1]


def _same_type_and_equal(subject: Any, expected: Any) -> bool:
    return type(subject) is type(expected) and bool(subject == expected)


def _type_name(expected_type: Any) -> str:
    return getattr(expected_type, "__name__", repr(expected_type))


@register(object)
class Assertion(Generic[T]):
    """A subject under test together with the outcome of the check that produced it.

    Every check returns a new node over the same subject (or a narrowed
    one) whose outcome is the result of that check; the receiver is never
    mutated. Inside a composition block, failed checks are recorded and the
    chain carries on: checks chained after a failure are skipped. Outside of
    any block the reporter raises as soon as a check fails.
    """

    def __init__(
        self,
        subject: T,
        description: str = "value",
        *,
        outcome: Outcome = PENDING,
        scope: Collector | None = None,
        parent: Assertion[Any] | None = None,
        children: Collector | None = None,
        expectation: Expectation | None = None,
    ):
        self.subject = subject
        self.description = description
        self.children = children
        self._outcome = outcome
        self._scope = scope
        self._parent = weakref.ref(parent) if parent is not None else None
        self._expectation = expectation

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({short_repr(self.subject)}, "
            f"{self.description!r}, {self._outcome.status.value})"
        )

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def parent(self) -> Assertion[Any] | None:
        return self._parent() if self._parent is not None else None

    # -- engine ---------------------------------------------------------

    def assert_that(
        self,
        description: str,
        predicate: Callable[[T], Any],
        *,
        expected: Any = _UNSET,
        found: Callable[[T], Any] | None = None,
        kind: FailureKind = FailureKind.CHECK,
        narrow_to: type[Assertion[Any]] | None = None,
    ) -> Assertion[Any]:
        """Run one leaf check against the subject and return the node holding its outcome.

        Args:
            description: What is being asserted, e.g. ``"has length 7"``.
            predicate: Called with the subject; a truthy result passes. An
                exception raised by it fails the check and is kept as the
                failure's ``error``.
            expected: Expected value, kept on the failure detail.
            found: Called with the subject when the check fails to report
                what was found instead (e.g. ``len``).
            kind: ``FailureKind.VIOLATION`` for structural expectations.
            narrow_to: Node class of the returned node; defaults to the
                receiver's class.
        """
        node_class = narrow_to or type(self)
        if self._outcome.failed:
            return self._derive(node_class, self.subject, description, outcome=self._outcome)

        error: Exception | None = None
        try:
            holds = bool(predicate(self.subject))
        except Exception as e:
            holds, error = False, e

        if holds:
            outcome = PASSED
        else:
            actual = found(self.subject) if found is not None and error is None else _UNSET
            outcome = Outcome.failure(
                FailureDetail(
                    kind=kind,
                    description=description,
                    subject=self.subject,
                    expected=expected,
                    actual=actual,
                    error=error,
                )
            )

        node = self._derive(node_class, self.subject, description, outcome=outcome)
        return self._record(node)

    def nested(
        self,
        description: str,
        rule: AggregationRule,
        block: Callable[[Assertion[Any]], Any],
        *,
        subject: Any = _UNSET,
    ) -> Assertion[Any]:
        """Run *block* against a child node and fold its checks with *rule*.

        The block receives a node over *subject* (default: this node's
        subject) that records every check into a fresh collector. When the
        block returns, the collected outcomes are folded and the composite
        node, carrying the folded outcome, is recorded in the enclosing block
        or reported at the root.
        """
        if subject is _UNSET:
            child_subject, node_class = self.subject, type(self)
        else:
            child_subject, node_class = subject, assertion_class_for(type(subject))

        if self._outcome.failed:
            return self._derive(node_class, child_subject, description, outcome=self._outcome)

        collector = Collector(rule)
        composite = self._derive(node_class, child_subject, description, children=collector)
        block(
            node_class(
                child_subject,
                description,
                scope=collector,
                parent=composite,
            )
        )
        composite._settle(collector.fold(description, child_subject))
        return self._record(composite)

    def and_(self, block: Callable[[Assertion[Any]], Any]) -> Assertion[Any]:
        """Run every check in *block* and pass only if all of them pass."""
        return self.nested("satisfies all of", AggregationRule.ALL, block)

    def get(
        self,
        fn: Callable[[T], U],
        description: str | None = None,
        *,
        node_class: type[Assertion[Any]] | None = None,
    ) -> Assertion[U]:
        """Map the subject to a derived value and return a node over it.

        Mapping is not a check. If *fn* raises, a failed check is recorded.
        *node_class* is used when there is no value to dispatch on, so chains
        on a failed node keep the checks of the mapped type.
        """
        description = description or f"value of {getattr(fn, '__name__', 'function')}"
        node_class = node_class or Assertion
        if self._outcome.failed:
            return self._derive(node_class, None, description, outcome=self._outcome)
        try:
            value = fn(self.subject)
        except Exception as e:
            node = self._derive(
                node_class,
                None,
                description,
                outcome=Outcome.failure(
                    FailureDetail(
                        kind=FailureKind.CHECK,
                        description=f"can be mapped to its {description}",
                        subject=self.subject,
                        error=e,
                    )
                ),
            )
            return self._record(node)
        return self._derive(assertion_class_for(type(value)), value, description)

    def _derive(
        self,
        node_class: type[Assertion[Any]],
        subject: Any,
        description: str,
        *,
        outcome: Outcome = PENDING,
        children: Collector | None = None,
    ) -> Assertion[Any]:
        return node_class(
            subject,
            description,
            outcome=outcome,
            scope=self._scope,
            parent=self,
            children=children,
            expectation=self._root_expectation(),
        )

    def _settle(self, outcome: Outcome) -> None:
        if self._outcome.terminal:
            raise RuntimeError(f"outcome of {self.description!r} is already settled")
        self._outcome = outcome

    def _root_expectation(self) -> Expectation | None:
        # Nodes outside any block share one expectation along their chain
        if self._scope is None and self._expectation is None:
            self._expectation = Expectation(get_reporter())
        return self._expectation

    def _record(self, node: Assertion[Any]) -> Assertion[Any]:
        if self._scope is not None:
            self._scope.record(node)
            return node
        expectation = self._root_expectation()
        return expectation.reporter.report(node, expectation)

    # -- checks ---------------------------------------------------------

    def satisfies(self, description: str, predicate: Callable[[T], Any]) -> Assertion[T]:
        return self.assert_that(description, predicate)

    def is_null(self) -> Assertion[None]:
        return self.assert_that("is None", lambda s: s is None, narrow_to=Assertion)

    def is_not_null(self) -> Assertion[Any]:
        narrow_to = (
            assertion_class_for(type(self.subject)) if self.subject is not None else type(self)
        )
        return self.assert_that("is not None", lambda s: s is not None, narrow_to=narrow_to)

    def is_a(self, expected_type: type[U]) -> Assertion[U]:
        origin = typing.get_origin(expected_type)
        if origin is not None and origin not in (typing.Union, types.UnionType):
            raise ValueError(
                f"is_a() cannot check parameterised type {expected_type!r}; "
                f"use {_type_name(origin)} and check the contents separately"
            )
        return self.assert_that(
            f"is an instance of {_type_name(expected_type)}",
            lambda s: s is not None and isinstance(s, expected_type),
            expected=expected_type,
            found=type,
            # Unions narrow to the plain node
            narrow_to=Assertion if origin is not None else assertion_class_for(expected_type),
        )

    def is_equal_to(self, expected: Any) -> Assertion[T]:
        return self.assert_that(
            f"is equal to {short_repr(expected)}",
            lambda s: _same_type_and_equal(s, expected),
            expected=expected,
        )

    def is_not_equal_to(self, expected: Any) -> Assertion[T]:
        return self.assert_that(
            f"is not equal to {short_repr(expected)}",
            lambda s: not _same_type_and_equal(s, expected),
            expected=expected,
        )

    def is_same_instance_as(self, expected: Any) -> Assertion[T]:
        return self.assert_that(
            f"is the same instance as {short_repr(expected)}",
            lambda s: s is expected,
            expected=expected,
        )

    def is_not_same_instance_as(self, expected: Any) -> Assertion[T]:
        return self.assert_that(
            f"is not the same instance as {short_repr(expected)}",
            lambda s: s is not expected,
            expected=expected,
        )

    def is_in(self, values: Any) -> Assertion[T]:
        return self.assert_that(
            f"is in {short_repr(values)}",
            lambda s: s in values,
            expected=values,
        )
