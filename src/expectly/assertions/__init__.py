"""Node classes providing the checks for each kind of subject."""

from expectly.assertions.base import Assertion, assertion_class_for, register
from expectly.assertions.catching import (
    ExceptionAssertion,
    FailureAssertion,
    SuccessAssertion,
    TryAssertion,
)
from expectly.assertions.comparables import ComparableAssertion
from expectly.assertions.iterables import CollectionAssertion, IterableAssertion
from expectly.assertions.strings import StringAssertion

__all__ = [
    "Assertion",
    "CollectionAssertion",
    "ComparableAssertion",
    "ExceptionAssertion",
    "FailureAssertion",
    "IterableAssertion",
    "StringAssertion",
    "SuccessAssertion",
    "TryAssertion",
    "assertion_class_for",
    "register",
]
