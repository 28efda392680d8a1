from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


def _expand(value: str | None) -> str | None:
    """Expand ``${VAR}`` references, failing on variables that are unset and have no default."""
    if value is None:
        return None
    try:
        return expandvars(value, nounset=True)
    except Exception as e:
        raise ValueError(f"'{value}' references a missing environment variable: {e}")


class ReportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    junit: str | None = None
    html: str | None = None
    suite_name: str = "expectly"

    @field_validator("junit", "html")
    @classmethod
    def expand_env(cls, v: str | None) -> str | None:
        return _expand(v)

    @model_validator(mode="after")
    def html_requires_junit(self) -> ReportConfig:
        # The HTML report is rendered from the junit.xml
        if self.html and not self.junit:
            raise ValueError("report.html requires report.junit to be set")
        return self


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    debug_file: str | None = None
    verbose: bool = False

    @field_validator("debug_file")
    @classmethod
    def expand_env(cls, v: str | None) -> str | None:
        return _expand(v)


class ExpectlyConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    report: ReportConfig = ReportConfig()
    logging: LoggingConfig = LoggingConfig()
    max_repr_length: int = 80

    @field_validator("max_repr_length")
    @classmethod
    def repr_length_must_be_usable(cls, v: int) -> int:
        if v < 8:
            raise ValueError("max_repr_length must be at least 8")
        return v


def load_config(path: Path) -> ExpectlyConfig:
    """Load and validate an expectly config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = ExpectlyConfig(**raw)

    # Resolve relative output paths relative to config file location
    for section, key in (
        (config.report, "junit"),
        (config.report, "html"),
        (config.logging, "debug_file"),
    ):
        value = getattr(section, key)
        if value is not None and not Path(value).is_absolute():
            setattr(section, key, str((config_dir / value).resolve()))

    return config
