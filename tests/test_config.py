"""Tests for config loading and validation."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from expectly.config import ExpectlyConfig, ReportConfig, load_config


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "expectly.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_empty_config_uses_defaults(tmp_yaml):
    config = load_config(tmp_yaml(""))
    assert config.report.junit is None
    assert config.report.html is None
    assert config.report.suite_name == "expectly"
    assert config.logging.debug_file is None
    assert config.logging.verbose is False
    assert config.max_repr_length == 80


def test_load_full_config(tmp_yaml, tmp_path):
    path = tmp_yaml("""\
        report:
          junit: reports/junit.xml
          html: reports/report.html
          suite_name: words
        logging:
          debug_file: reports/debug.log
          verbose: true
        max_repr_length: 40
    """)
    config = load_config(path)
    assert config.report.suite_name == "words"
    assert config.logging.verbose is True
    assert config.max_repr_length == 40


def test_relative_paths_resolve_against_config_dir(tmp_yaml, tmp_path):
    path = tmp_yaml("""\
        report:
          junit: reports/junit.xml
        logging:
          debug_file: debug.log
    """)
    config = load_config(path)
    assert config.report.junit == str((tmp_path / "reports" / "junit.xml").resolve())
    assert config.logging.debug_file == str((tmp_path / "debug.log").resolve())


def test_absolute_paths_are_kept(tmp_yaml, tmp_path):
    target = tmp_path / "elsewhere" / "junit.xml"
    config = load_config(tmp_yaml(f"report:\n  junit: {target}\n"))
    assert config.report.junit == str(target)


def test_env_vars_are_expanded(tmp_yaml, tmp_path, monkeypatch):
    monkeypatch.setenv("EXPECTLY_OUT", str(tmp_path / "out"))
    config = load_config(tmp_yaml("""\
        report:
          junit: ${EXPECTLY_OUT}/junit.xml
    """))
    assert config.report.junit == str(tmp_path / "out" / "junit.xml")


def test_env_var_default_is_used(tmp_yaml, tmp_path, monkeypatch):
    monkeypatch.delenv("EXPECTLY_UNSET_DIR", raising=False)
    config = load_config(tmp_yaml("""\
        logging:
          debug_file: ${EXPECTLY_UNSET_DIR:-logs}/debug.log
    """))
    assert config.logging.debug_file == str((tmp_path / "logs" / "debug.log").resolve())


def test_missing_env_var_is_rejected(tmp_yaml, monkeypatch):
    monkeypatch.delenv("EXPECTLY_MISSING", raising=False)
    with pytest.raises(ValidationError, match="EXPECTLY_MISSING"):
        load_config(tmp_yaml("""\
            report:
              junit: ${EXPECTLY_MISSING}/junit.xml
        """))


def test_unknown_keys_are_rejected(tmp_yaml):
    with pytest.raises(ValidationError):
        load_config(tmp_yaml("""\
            report:
              junit: junit.xml
              xml: other.xml
        """))


def test_unknown_top_level_key_is_rejected():
    with pytest.raises(ValidationError):
        ExpectlyConfig(reporters=["junit"])


def test_html_requires_junit():
    with pytest.raises(ValidationError, match="requires report.junit"):
        ReportConfig(html="report.html")


@pytest.mark.parametrize("length", [0, 7])
def test_max_repr_length_too_small(length):
    with pytest.raises(ValidationError, match="at least 8"):
        ExpectlyConfig(max_repr_length=length)
