"""Capturing the result of an action as a value or an error."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Try(Generic[T]):
    """Result of running an action once: a :class:`Success` or a :class:`Failure`."""


@dataclass(frozen=True)
class Success(Try[T]):
    value: T


@dataclass(frozen=True)
class Failure(Try[Any]):
    error: Exception


def capture(action: Callable[[], T]) -> Try[T]:
    """Call *action* exactly once and capture its return value or raised exception.

    Only ``Exception`` subclasses are captured; ``KeyboardInterrupt`` and
    ``SystemExit`` propagate.
    """
    try:
        value = action()
    except Exception as e:
        logger.debug(f"Captured {type(e).__name__} from {getattr(action, '__name__', action)!r}")
        return Failure(e)
    return Success(value)
