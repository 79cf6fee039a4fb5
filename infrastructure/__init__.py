"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Remote catalog download (httpx)
- PostgreSQL row count and bulk copy (psycopg)
- Configuration loading (YAML, environment)
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import AppConfig, load_app_config
from infrastructure.db import connect, copy_rows, count_rows
from infrastructure.remote import fetch_catalog

__all__ = [
    "AppConfig",
    "load_app_config",
    "fetch_catalog",
    "connect",
    "count_rows",
    "copy_rows",
]
