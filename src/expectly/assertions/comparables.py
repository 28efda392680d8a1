"""Ordering checks on numbers and dates."""

from __future__ import annotations

import datetime
import numbers
from typing import Any

from expectly.assertions.base import Assertion, register
from expectly.outcome import short_repr


@register(numbers.Real, datetime.date, datetime.time, datetime.timedelta)
class ComparableAssertion(Assertion[Any]):
    def is_greater_than(self, expected: Any) -> ComparableAssertion:
        return self.assert_that(
            f"is greater than {short_repr(expected)}",
            lambda s: s > expected,
            expected=expected,
        )

    def is_greater_than_or_equal_to(self, expected: Any) -> ComparableAssertion:
        return self.assert_that(
            f"is greater than or equal to {short_repr(expected)}",
            lambda s: s >= expected,
            expected=expected,
        )

    def is_less_than(self, expected: Any) -> ComparableAssertion:
        return self.assert_that(
            f"is less than {short_repr(expected)}",
            lambda s: s < expected,
            expected=expected,
        )

    def is_less_than_or_equal_to(self, expected: Any) -> ComparableAssertion:
        return self.assert_that(
            f"is less than or equal to {short_repr(expected)}",
            lambda s: s <= expected,
            expected=expected,
        )

    def is_between(self, low: Any, high: Any) -> ComparableAssertion:
        """Inclusive on both ends."""
        return self.assert_that(
            f"is between {short_repr(low)} and {short_repr(high)}",
            lambda s: low <= s <= high,
            expected=(low, high),
        )
