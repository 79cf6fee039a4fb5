"""Configuration loading from YAML files and the environment."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from domain.errors import ConfigError
from infrastructure.config.models import AppConfig
from infrastructure.constants import ENV_OVERRIDES

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict. An empty file is an empty dict."""
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def _apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    for var, keys in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        node = data
        for key in keys[:-1]:
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        node[keys[-1]] = value
        logger.debug("Config override from %s", var)
    return data


def load_app_config(path: Path | None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load config.yaml (if present) and apply SEER_* environment overrides.

    A missing file is not an error: defaults plus environment are enough to
    run when credentials come from `.env`.

    Args:
        path: Path to config.yaml, or None to use defaults only
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated AppConfig

    Raises:
        ConfigError: If the file does not parse to a mapping or fails validation
    """
    environ = os.environ if environ is None else environ

    data: dict[str, Any] = {}
    if path is not None and path.exists():
        try:
            data = _load_yaml(path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
    elif path is not None:
        logger.info("Config file %s not found; using defaults and environment", path)

    data = _apply_env_overrides(data, environ)

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def write_config_snapshot(cfg: AppConfig, path: Path, *, include_password: bool = False) -> Path:
    """
    Write the resolved configuration to disk as YAML.

    The database password is blanked unless include_password is set.
    """
    payload = cfg.model_dump(mode="json")
    if not include_password:
        payload["db"]["auth"]["password"] = ""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(payload, f, sort_keys=False, allow_unicode=True)

    logger.info("Wrote config snapshot to %s", path)
    return path
