"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, TextIO

import yaml

from flightpath.core.config.models import AppConfig
from flightpath.core.utils.json import read_json
from flightpath.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "FLIGHTPATH_LOG_LEVEL"
ENV_SPEED_MULTIPLIER = "FLIGHTPATH_SPEED_MULTIPLIER"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("flightpath.json")
        'json'
        >>> detect_format("flightpath.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Missing files yield defaults. Environment variables override the
    logging level and speed multiplier.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to flightpath.yaml in the working directory.

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If config is invalid
    """
    if path is None:
        path = AppConfig.default_path()

    if Path(path).exists():
        config = AppConfig.model_validate(load_config(path))
        logger.debug("Loaded app config from %s", path)
    else:
        config = AppConfig()

    return _apply_env_overrides(config)


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Return a copy of config with environment overrides applied."""
    data = config.model_dump()

    level = os.getenv(ENV_LOG_LEVEL)
    if level:
        logger.debug("Using %s=%s", ENV_LOG_LEVEL, level)
        data["logging"]["level"] = level.upper()

    multiplier = os.getenv(ENV_SPEED_MULTIPLIER)
    if multiplier:
        try:
            data["tracker"]["speed_multiplier"] = float(multiplier)
        except ValueError as e:
            raise ValueError(f"{ENV_SPEED_MULTIPLIER} must be a number, got {multiplier!r}") from e
        logger.debug("Using %s=%s", ENV_SPEED_MULTIPLIER, multiplier)

    if not level and not multiplier:
        return config
    return AppConfig.model_validate(data)


def configure_logging(config: AppConfig | None = None, stream: TextIO | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
        stream: Console stream when no log file is configured (default: stdout)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
        stream=stream,
    )
