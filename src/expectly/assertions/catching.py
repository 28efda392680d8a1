"""Checks on captured action results and on exceptions."""

from __future__ import annotations

from typing import Any

from expectly.assertions.base import Assertion, register
from expectly.assertions.strings import StringAssertion
from expectly.catching import Failure, Success, Try
from expectly.outcome import FailureKind


@register(BaseException)
class ExceptionAssertion(Assertion[BaseException]):
    @property
    def message(self) -> Assertion[str]:
        return self.get(str, "message", node_class=StringAssertion)

    @property
    def cause(self) -> Assertion[Any]:
        return self.get(lambda e: e.__cause__, "cause")


@register(Try)
class TryAssertion(Assertion[Try[Any]]):
    def succeeded(self) -> SuccessAssertion:
        """Pass if the action returned, narrowing to its :class:`Success`."""
        return self.assert_that(
            "succeeded",
            lambda s: isinstance(s, Success),
            found=lambda s: getattr(s, "error", s),
            kind=FailureKind.VIOLATION,
            narrow_to=SuccessAssertion,
        )

    def failed(self) -> FailureAssertion:
        """Pass if the action raised, narrowing to its :class:`Failure`."""
        return self.assert_that(
            "failed",
            lambda s: isinstance(s, Failure),
            found=lambda s: getattr(s, "value", s),
            kind=FailureKind.VIOLATION,
            narrow_to=FailureAssertion,
        )


@register(Success)
class SuccessAssertion(TryAssertion):
    @property
    def value(self) -> Assertion[Any]:
        return self.get(lambda s: s.value, "value")


@register(Failure)
class FailureAssertion(TryAssertion):
    @property
    def exception(self) -> ExceptionAssertion:
        return self.get(lambda s: s.error, "exception", node_class=ExceptionAssertion)
