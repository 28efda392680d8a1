"""Turns terminal outcome trees into summaries and raised failures."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Protocol, TYPE_CHECKING

from expectly.errors import (
    AggregateFailed,
    CheckFailed,
    ExpectationFailed,
    ExpectationViolated,
)
from expectly.outcome import FailureDetail, FailureKind, short_repr

if TYPE_CHECKING:
    from expectly.assertions.base import Assertion
    from expectly.config import ExpectlyConfig

logger = logging.getLogger(__name__)

_expectation_ids = itertools.count(1)


@dataclass
class FailureSummary:
    """Counts and failure details of one root expectation.

    Attributes:
        description: Description of the checks run on the root chain.
        passed: Whether every check on the root chain passed.
        assertion_count: Leaf checks executed, passed ones included.
        pass_count: Leaf checks that passed.
        failure_count: Leaf checks that failed.
        failures: Leaf failure details in execution order.
        message: Rendered outcome tree.
        key: Identifies the root expectation. A later summary with the same
            key supersedes an earlier one; ``None`` is never superseded.
    """

    description: str
    passed: bool
    assertion_count: int
    pass_count: int
    failure_count: int
    failures: list[FailureDetail] = field(default_factory=list)
    message: str = ""
    key: int | None = None


class Expectation:
    """The checks chained from one root node, reported as a single summary.

    Every node derived from the root outside of a composition block shares
    the same expectation, so ``expect(s).is_a(str).has_length(7)`` is one
    expectation with two checks.
    """

    def __init__(self, reporter: Reporter):
        self.reporter = reporter
        self.key = next(_expectation_ids)
        self.nodes: list[Assertion[Any]] = []


def iter_leaves(node: Assertion[Any]) -> Iterator[Assertion[Any]]:
    """Depth-first, execution-ordered leaf checks under *node*."""
    if node.children is None:
        yield node
        return
    for child in node.children.nodes:
        yield from iter_leaves(child)


def render_tree(node: Assertion[Any], max_repr_length: int = 80, depth: int = 0) -> list[str]:
    indent = "  " * depth
    mark = "✓" if node.outcome.passed else "✗"
    detail = node.outcome.detail
    if detail is not None:
        line = f"{indent}{mark} {detail.describe(max_repr_length)}"
    else:
        line = f"{indent}{mark} {short_repr(node.subject, max_repr_length)} {node.description}"
    lines = [line]
    if node.children is not None:
        for child in node.children.nodes:
            lines.extend(render_tree(child, max_repr_length, depth + 1))
    return lines


def _chain_description(nodes: list[Assertion[Any]], max_repr_length: int) -> str:
    # The subject is repeated only where a mapping or narrowing changed it
    parts = []
    previous: Any = object()
    for node in nodes:
        if node.subject is previous:
            parts.append(node.description)
        else:
            parts.append(f"{short_repr(node.subject, max_repr_length)} {node.description}")
        previous = node.subject
    return ", ".join(parts)


def summarize_chain(
    nodes: list[Assertion[Any]], max_repr_length: int = 80, key: int | None = None
) -> FailureSummary:
    """Summarize the checks recorded on one root chain, in execution order."""
    leaves = [leaf for node in nodes for leaf in iter_leaves(node)]
    failures = [
        leaf.outcome.detail
        for leaf in leaves
        if leaf.outcome.failed and leaf.outcome.detail is not None
    ]
    pass_count = sum(1 for leaf in leaves if leaf.outcome.passed)
    return FailureSummary(
        description=_chain_description(nodes, max_repr_length),
        passed=all(node.outcome.passed for node in nodes),
        assertion_count=pass_count + len(failures),
        pass_count=pass_count,
        failure_count=len(failures),
        failures=failures,
        message="\n".join(line for node in nodes for line in render_tree(node, max_repr_length)),
        key=key,
    )


def summarize(node: Assertion[Any], max_repr_length: int = 80) -> FailureSummary:
    return summarize_chain([node], max_repr_length)


class ReportSink(Protocol):
    """Receives the summary of every root expectation.

    A root expectation is summarized again after each check chained on it;
    sinks keep only the latest summary for each ``key``.
    """

    def accept(self, summary: FailureSummary) -> None: ...

    def close(self) -> None: ...


class Reporter:
    """Reports root expectations: silent when they pass, raising when they fail."""

    def __init__(self, sinks: list[ReportSink] | None = None, max_repr_length: int = 80):
        self.sinks: list[ReportSink] = list(sinks or [])
        self.max_repr_length = max_repr_length

    def report(
        self, node: Assertion[Any], expectation: Expectation | None = None
    ) -> Assertion[Any]:
        """Add *node* to *expectation* and pass the updated summary to every sink.

        Without an expectation, *node* is reported on its own. Raises the
        matching :class:`ExpectationFailed` when *node* failed.
        """
        if not node.outcome.terminal:
            raise ValueError(f"cannot report pending expectation {node.description!r}")

        if expectation is None:
            summary = summarize_chain([node], self.max_repr_length)
        else:
            expectation.nodes.append(node)
            summary = summarize_chain(expectation.nodes, self.max_repr_length, expectation.key)
        for sink in self.sinks:
            sink.accept(summary)

        if node.outcome.passed:
            return node

        logger.debug(
            f"Expectation '{summary.description}' failed: "
            f"{summary.failure_count}/{summary.assertion_count} checks failed"
        )
        raise self._error_for(node, summary)

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()

    @staticmethod
    def _error_for(node: Assertion[Any], summary: FailureSummary) -> ExpectationFailed:
        detail = node.outcome.detail
        if detail is None or detail.kind is FailureKind.AGGREGATE:
            return AggregateFailed(summary)
        if detail.kind is FailureKind.VIOLATION:
            return ExpectationViolated(summary)
        return CheckFailed(summary)


_default_reporter = Reporter()


def get_reporter() -> Reporter:
    return _default_reporter


def set_reporter(reporter: Reporter) -> Reporter:
    """Install *reporter* as the default and return the previous one."""
    global _default_reporter
    previous, _default_reporter = _default_reporter, reporter
    return previous


def configure(config: ExpectlyConfig) -> Reporter:
    """Build a reporter (and logging) from *config* and install it as the default.

    The previously installed reporter is closed, so its sinks write what
    they buffered. Handlers attached to the ``expectly`` logger by an earlier
    call are replaced.
    """
    from expectly.reporting.junit import JUnitSink
    from expectly.verbose import reset_logger, setup_logger

    reset_logger()
    if config.logging.debug_file:
        setup_logger(Path(config.logging.debug_file), verbose=config.logging.verbose)

    sinks: list[ReportSink] = []
    if config.report.junit:
        sinks.append(
            JUnitSink(
                config.report.junit,
                suite_name=config.report.suite_name,
                html_path=config.report.html,
            )
        )

    reporter = Reporter(sinks=sinks, max_repr_length=config.max_repr_length)
    set_reporter(reporter).close()
    return reporter
