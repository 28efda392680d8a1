"""Tests for verbose logging."""

import logging

from expectly import expect
from expectly.verbose import reset_logger, setup_logger


def test_verbose_logger_creates_debug_log(tmp_path):
    """Logger should always create debug.log file."""
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_verbose_logger_writes_to_file(tmp_path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "[" in content  # timestamp


def test_verbose_mode_adds_stderr_handler(tmp_path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_non_verbose_mode_only_file_handler(tmp_path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=False)

    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]).__name__ == "FileHandler"


def test_logger_creates_parent_directories(tmp_path):
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    assert debug_file.exists()


def test_package_loggers_propagate_to_debug_file(tmp_path):
    """Folds logged by expectly.composition land in the package debug log."""
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file)

    expect([1, 2]).all(lambda it: it.is_greater_than(0))

    assert "Folded 2 outcome(s)" in debug_file.read_text()


def test_lines_name_the_module_logger(tmp_path):
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file)

    expect([1]).all(lambda it: it.is_greater_than(0))

    assert "DEBUG expectly.composition: Folded" in debug_file.read_text()


def test_reset_logger_allows_setup_again(tmp_path):
    setup_logger(tmp_path / "first.log")
    reset_logger()
    logger = setup_logger(tmp_path / "second.log")

    logger.debug("after reset")

    assert len(logger.handlers) == 1
    assert "after reset" in (tmp_path / "second.log").read_text()
    assert "after reset" not in (tmp_path / "first.log").read_text()
