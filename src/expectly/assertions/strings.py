"""Checks on text subjects."""

from __future__ import annotations

import re

from expectly.assertions.base import register
from expectly.assertions.iterables import CollectionAssertion
from expectly.outcome import short_repr


@register(str)
class StringAssertion(CollectionAssertion[str]):
    def has_length(self, expected: int) -> StringAssertion:
        return self.assert_that(
            f"has length {expected}",
            lambda s: len(s) == expected,
            expected=expected,
            found=len,
        )

    def is_lower_case(self) -> StringAssertion:
        return self.assert_that("is lower case", lambda s: s == s.lower())

    def is_upper_case(self) -> StringAssertion:
        return self.assert_that("is upper case", lambda s: s == s.upper())

    def starts_with(self, prefix: str) -> StringAssertion:
        return self.assert_that(
            f"starts with {short_repr(prefix)}",
            lambda s: s.startswith(prefix),
            expected=prefix,
        )

    def ends_with(self, suffix: str) -> StringAssertion:
        return self.assert_that(
            f"ends with {short_repr(suffix)}",
            lambda s: s.endswith(suffix),
            expected=suffix,
        )

    def contains(self, *substrings: str) -> StringAssertion:
        return self.assert_that(
            f"contains {', '.join(short_repr(sub) for sub in substrings)}",
            lambda s: all(sub in s for sub in substrings),
            expected=list(substrings),
        )

    def matches(self, pattern: str | re.Pattern[str]) -> StringAssertion:
        """Pass if the whole subject matches *pattern*."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self.assert_that(
            f"matches /{regex.pattern}/",
            lambda s: regex.fullmatch(s) is not None,
            expected=regex.pattern,
        )

    def is_blank(self) -> StringAssertion:
        return self.assert_that("is blank", lambda s: s.strip() == "")

    def is_not_blank(self) -> StringAssertion:
        return self.assert_that("is not blank", lambda s: s.strip() != "")
