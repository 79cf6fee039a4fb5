"""
Configuration management: models, loading, and validation.

Handles:
- AppConfig: database and catalog settings
- YAML loading with SEER_* environment variable overrides
- Snapshotting the resolved config back to disk

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import load_app_config, write_config_snapshot
from infrastructure.config.models import (
    AppConfig,
    CatalogConfig,
    DbAuthConfig,
    DbConfig,
)

__all__ = [
    "AppConfig",
    "load_app_config",
    "write_config_snapshot",
    "CatalogConfig",
    "DbConfig",
    "DbAuthConfig",
]
