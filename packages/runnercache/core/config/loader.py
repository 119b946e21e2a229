"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

from collections.abc import Mapping
import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from runnercache.core.config.models import CacheSettings

logger = logging.getLogger(__name__)

# Environment variables read by load_settings()
ENV_CACHE_ROOT = "GHRUNNER_CACHE"
ENV_REPOSITORY = "GITHUB_REPOSITORY"
ENV_REF_NAME = "GITHUB_REF_NAME"
ENV_WORKSPACE = "GITHUB_WORKSPACE"
ENV_TEMP_DIR = "RUNNER_TEMP"
ENV_COMPRESSION = "RUNNERCACHE_COMPRESSION"
ENV_DEBUG = "RUNNER_DEBUG"

_ENV_FIELDS = {
    ENV_CACHE_ROOT: "root",
    ENV_REPOSITORY: "repository",
    ENV_REF_NAME: "ref",
    ENV_WORKSPACE: "workspace",
    ENV_TEMP_DIR: "temp_dir",
    ENV_COMPRESSION: "compression",
}


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("cache.json")
        'json'
        >>> detect_format("cache.yml")
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

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

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
            content = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}")
    return content


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> CacheSettings:
    """Load and validate cache settings.

    Values from the optional config file are overlaid by environment
    variables, so the runner environment always wins. This is the only
    place environment variables are read; everything downstream receives
    the resulting CacheSettings explicitly.

    Args:
        path: Optional config file (.json, .yaml, or .yml)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated CacheSettings

    Raises:
        pydantic.ValidationError: If settings are invalid
    """
    if environ is None:
        environ = os.environ

    raw: dict[str, Any] = load_config(path) if path is not None else {}

    for env_name, field_name in _ENV_FIELDS.items():
        value = environ.get(env_name)
        if value:
            logger.debug(f"Loaded {field_name} from {env_name}")
            raw[field_name] = value

    if environ.get(ENV_DEBUG) == "1":
        logging_raw = dict(raw.get("logging") or {})
        logging_raw["level"] = "DEBUG"
        raw["logging"] = logging_raw

    return CacheSettings.model_validate(raw)
