"""Outcome records produced by checks."""

from __future__ import annotations

import reprlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from expectly.composition import AggregationRule

_UNSET: Any = object()


class Status(str, Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"


class FailureKind(str, Enum):
    CHECK = "check"
    VIOLATION = "violation"
    AGGREGATE = "aggregate"


def short_repr(value: Any, max_length: int = 80) -> str:
    """repr() bounded to *max_length* characters."""
    limiter = reprlib.Repr()
    limiter.maxstring = max_length
    limiter.maxother = max_length
    text = limiter.repr(value)
    if len(text) > max_length:
        text = text[: max_length - 3] + "..."
    return text


@dataclass(frozen=True)
class FailureDetail:
    """Why a check failed.

    Attributes:
        kind: ``check`` for a predicate that did not hold, ``violation`` for
            structural misuse (e.g. ``succeeded()`` on a failed action) and
            ``aggregate`` for a block whose rule was not satisfied.
        description: What was asserted, e.g. ``"starts with 'c'"``.
        subject: The value the check ran against.
        expected: The expected value, when the check has one.
        actual: The value that was found, when it differs from the subject.
        error: An exception raised while evaluating the predicate, or the
            exception captured from an action.
        rule: Aggregation rule of an ``aggregate`` failure.
        pass_count: Direct children that passed (aggregates only).
        failure_count: Direct children that failed (aggregates only).
        causes: Details of the failed direct children (aggregates only).
    """

    kind: FailureKind
    description: str
    subject: Any = None
    expected: Any = _UNSET
    actual: Any = _UNSET
    error: BaseException | None = None
    rule: AggregationRule | None = None
    pass_count: int = 0
    failure_count: int = 0
    causes: tuple[FailureDetail, ...] = field(default_factory=tuple)

    @property
    def has_expected(self) -> bool:
        return self.expected is not _UNSET

    @property
    def has_actual(self) -> bool:
        return self.actual is not _UNSET

    def describe(self, max_repr_length: int = 80) -> str:
        text = f"expected that {short_repr(self.subject, max_repr_length)} {self.description}"
        if self.kind is FailureKind.AGGREGATE and self.rule is not None:
            text += (
                f" ({self.rule.value}: {self.pass_count} passed,"
                f" {self.failure_count} failed)"
            )
        if self.has_actual:
            text += f", found {short_repr(self.actual, max_repr_length)}"
        if self.error is not None:
            text += f", raised {type(self.error).__name__}: {self.error}"
        return text


@dataclass(frozen=True)
class Outcome:
    """Result of a single check: pending, passed, or failed with a detail."""

    status: Status
    detail: FailureDetail | None = None

    def __post_init__(self) -> None:
        if (self.status is Status.FAILED) != (self.detail is not None):
            raise ValueError("a failure detail is required iff the outcome failed")

    @property
    def pending(self) -> bool:
        return self.status is Status.PENDING

    @property
    def passed(self) -> bool:
        return self.status is Status.PASSED

    @property
    def failed(self) -> bool:
        return self.status is Status.FAILED

    @property
    def terminal(self) -> bool:
        return self.status is not Status.PENDING

    @classmethod
    def failure(cls, detail: FailureDetail) -> Outcome:
        return cls(Status.FAILED, detail)


PENDING = Outcome(Status.PENDING)
PASSED = Outcome(Status.PASSED)
