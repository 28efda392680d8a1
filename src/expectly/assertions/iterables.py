"""Checks on iterables and sized collections."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import Any, Callable, TypeVar

from expectly.assertions.base import Assertion, register
from expectly.composition import AggregationRule
from expectly.outcome import short_repr

E = TypeVar("E")


@register(Iterable)
class IterableAssertion(Assertion[Iterable[E]]):
    """Checks for any iterable subject.

    ``all``, ``any`` and ``none`` iterate the subject, so a one-shot iterator
    is consumed by the first of them.
    """

    def all(self, block: Callable[[Assertion[E]], Any]) -> IterableAssertion[E]:
        """Pass if every element satisfies the checks in *block*."""
        return self._each("all elements match predicate", AggregationRule.ALL, block)

    def any(self, block: Callable[[Assertion[E]], Any]) -> IterableAssertion[E]:
        """Pass if at least one element satisfies the checks in *block*."""
        return self._each("at least one element matches predicate", AggregationRule.ANY, block)

    def none(self, block: Callable[[Assertion[E]], Any]) -> IterableAssertion[E]:
        """Pass if no element satisfies the checks in *block*."""
        return self._each("no elements match predicate", AggregationRule.NONE, block)

    def _each(
        self,
        description: str,
        rule: AggregationRule,
        block: Callable[[Assertion[E]], Any],
    ) -> IterableAssertion[E]:
        def each_element(group: Assertion[Any]) -> None:
            for element in group.subject:
                group.nested("matches predicate", AggregationRule.ALL, block, subject=element)

        return self.nested(description, rule, each_element)

    def contains(self, *elements: Any) -> IterableAssertion[E]:
        return self.assert_that(
            f"contains {', '.join(short_repr(e) for e in elements)}",
            lambda s: _contains_all(list(s), elements),
            expected=list(elements),
        )

    def does_not_contain(self, *elements: Any) -> IterableAssertion[E]:
        return self.assert_that(
            f"does not contain {', '.join(short_repr(e) for e in elements)}",
            lambda s: not _contains_any(list(s), elements),
            expected=list(elements),
        )


def _contains_all(items: list[Any], elements: tuple[Any, ...]) -> bool:
    return all(e in items for e in elements)


def _contains_any(items: list[Any], elements: tuple[Any, ...]) -> bool:
    return any(e in items for e in elements)


@register(Collection)
class CollectionAssertion(IterableAssertion[E]):
    def has_size(self, expected: int) -> CollectionAssertion[E]:
        return self.assert_that(
            f"has size {expected}",
            lambda s: len(s) == expected,
            expected=expected,
            found=len,
        )

    def is_empty(self) -> CollectionAssertion[E]:
        return self.assert_that("is empty", lambda s: len(s) == 0, found=len)

    def is_not_empty(self) -> CollectionAssertion[E]:
        return self.assert_that("is not empty", lambda s: len(s) > 0)
