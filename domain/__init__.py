"""
Domain layer: Catalog logic with minimal external dependencies.

Contains:
- catalog: Linguist document decoding, row projection, copy source
- errors: Error taxonomy shared by every layer
"""

from domain.catalog import CatalogRow, LanguageDefinition, LanguageType
from domain.errors import (
    ConfigError,
    CountError,
    FetchError,
    IngestionError,
    LoadError,
    ParseError,
    ProjectionError,
)

__all__ = [
    "LanguageDefinition",
    "CatalogRow",
    "LanguageType",
    "IngestionError",
    "FetchError",
    "ParseError",
    "ProjectionError",
    "LoadError",
    "CountError",
    "ConfigError",
]
