"""Pytest configuration and fixtures."""

import logging

import pytest

from expectly.reporter import FailureSummary, Reporter, set_reporter
from expectly.verbose import reset_logger


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Detach handlers from expectly loggers after each test so setup_logger can run again."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("expectly"):
            reset_logger(name)


class RecordingSink:
    """Keeps the latest summary per root expectation, like JUnitSink."""

    def __init__(self):
        self.by_key: dict[object, FailureSummary] = {}
        self.accepted = 0
        self.closed = False

    @property
    def summaries(self) -> list[FailureSummary]:
        return list(self.by_key.values())

    def accept(self, summary: FailureSummary) -> None:
        self.accepted += 1
        self.by_key[summary.key if summary.key is not None else object()] = summary

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture(autouse=True)
def reporter(sink):
    """Install a fresh default reporter recording every root summary."""
    fresh = Reporter(sinks=[sink])
    previous = set_reporter(fresh)
    yield fresh
    set_reporter(previous)
