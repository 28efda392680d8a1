"""Aggregation rules and the collector that folds child outcomes."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, TYPE_CHECKING

from expectly.outcome import PASSED, FailureDetail, FailureKind, Outcome

if TYPE_CHECKING:
    from expectly.assertions.base import Assertion

logger = logging.getLogger(__name__)


class AggregationRule(str, Enum):
    ALL = "all"
    ANY = "any"
    NONE = "none"

    def is_satisfied(self, pass_count: int, failure_count: int) -> bool:
        if self is AggregationRule.ALL:
            return failure_count == 0
        if self is AggregationRule.ANY:
            return pass_count > 0
        return pass_count == 0


class Collector:
    """Records the nodes checked inside one composition block.

    A collector is handed to the block through the node it receives and is
    folded exactly once, when the block returns.
    """

    def __init__(self, rule: AggregationRule):
        self.rule = rule
        self.nodes: list[Assertion[Any]] = []
        self.folded = False

    def record(self, node: Assertion[Any]) -> None:
        if self.folded:
            raise RuntimeError(
                f"cannot record {node.description!r}: block has already been folded"
            )
        if not node.outcome.terminal:
            raise ValueError(f"cannot record pending check {node.description!r}")
        self.nodes.append(node)

    @property
    def pass_count(self) -> int:
        return sum(1 for n in self.nodes if n.outcome.passed)

    @property
    def failure_count(self) -> int:
        return sum(1 for n in self.nodes if n.outcome.failed)

    def fold(self, description: str, subject: Any) -> Outcome:
        """Close the collector and compute the block outcome under its rule."""
        if self.folded:
            raise RuntimeError(f"block {description!r} has already been folded")
        self.folded = True

        passed, failed = self.pass_count, self.failure_count
        satisfied = self.rule.is_satisfied(passed, failed)
        logger.debug(
            f"Folded {len(self.nodes)} outcome(s) of '{description}' under "
            f"{self.rule.name}: passed={passed} failed={failed} satisfied={satisfied}"
        )
        if satisfied:
            return PASSED

        return Outcome.failure(
            FailureDetail(
                kind=FailureKind.AGGREGATE,
                description=description,
                subject=subject,
                rule=self.rule,
                pass_count=passed,
                failure_count=failed,
                causes=tuple(
                    n.outcome.detail
                    for n in self.nodes
                    if n.outcome.failed and n.outcome.detail is not None
                ),
            )
        )
