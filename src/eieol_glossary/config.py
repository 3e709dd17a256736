"""
Configuration for the glossary command line tool.

Settings come from an optional YAML file and can be overridden by
environment variables (which a .env file may provide).
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .glossary import DEFAULT_EXCLUDE, DEFAULT_GLOSSARY_PATH
from .transliteration import FILTERS

logger = logging.getLogger("eieol-glossary")

ENV_GLOSSARY_PATH = "EIEOL_GLOSSARY_PATH"
ENV_STRUCTURED = "EIEOL_GLOSSARY_STRUCTURED"
ENV_FILTER = "EIEOL_GLOSSARY_FILTER"
ENV_LOG_LEVEL = "EIEOL_LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Invalid or unreadable configuration."""

    pass


class GlossaryConfig(BaseModel):
    """Settings for loading, ingesting and exporting a glossary."""

    glossary_path: Path = Field(
        default=DEFAULT_GLOSSARY_PATH,
        description="Glossary file read on start and written after changes",
    )
    structured: bool = Field(
        default=False,
        description="Whether the glossary file uses the structured layout",
    )
    exclude_pattern: str = Field(
        default=DEFAULT_EXCLUDE,
        description="Regex of file names skipped when adding a directory",
    )
    filter: str | None = Field(
        default=None,
        description="Transliteration filter applied after ingestion",
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("filter")
    @classmethod
    def validate_filter(cls, value: str | None) -> str | None:
        if value is not None and value not in FILTERS:
            raise ValueError(f"Unknown transliteration filter '{value}'")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{value}'")


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    # Settings may sit under a top-level "glossary" key
    section = data.get("glossary", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'glossary' section in {path} must be a mapping")
    return section


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if ENV_GLOSSARY_PATH in os.environ:
        overrides["glossary_path"] = Path(os.environ[ENV_GLOSSARY_PATH])
    if ENV_STRUCTURED in os.environ:
        overrides["structured"] = _parse_bool(ENV_STRUCTURED, os.environ[ENV_STRUCTURED])
    if ENV_FILTER in os.environ:
        overrides["filter"] = os.environ[ENV_FILTER] or None
    if ENV_LOG_LEVEL in os.environ:
        overrides["log_level"] = os.environ[ENV_LOG_LEVEL]
    return overrides


def load_config(path: Path | None = None) -> GlossaryConfig:
    """Build the configuration from a YAML file and the environment.

    Environment variables take precedence over the file.

    Args:
        path: Optional YAML config file

    Returns:
        Validated GlossaryConfig

    Raises:
        FileNotFoundError: If ``path`` is given but doesn't exist
        ConfigError: If the file or an environment value is invalid
    """
    values: dict[str, Any] = {}
    if path is not None:
        try:
            values.update(_read_yaml(path))
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed config file {path}: {e}") from e
        logger.debug(f"Loaded config from {path}")
    values.update(_env_overrides())

    try:
        return GlossaryConfig(**values)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


__all__ = [
    "ConfigError",
    "GlossaryConfig",
    "load_config",
]
