"""Errors raised when a root expectation fails."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from expectly.outcome import FailureDetail
    from expectly.reporter import FailureSummary


class ExpectationFailed(AssertionError):
    """Base class for every failure surfaced to the caller.

    Subclasses ``AssertionError`` so test runners report it as a test
    failure rather than an error.
    """

    def __init__(self, summary: FailureSummary):
        super().__init__(summary.message)
        self.summary = summary

    @property
    def assertion_count(self) -> int:
        return self.summary.assertion_count

    @property
    def pass_count(self) -> int:
        return self.summary.pass_count

    @property
    def failure_count(self) -> int:
        return self.summary.failure_count

    @property
    def failures(self) -> list[FailureDetail]:
        return self.summary.failures


class CheckFailed(ExpectationFailed):
    """A leaf predicate did not hold."""


class ExpectationViolated(ExpectationFailed):
    """A structural expectation was violated, e.g. ``succeeded()`` on a failed action."""


class AggregateFailed(ExpectationFailed):
    """A composition block did not satisfy its aggregation rule."""
