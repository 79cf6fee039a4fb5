"""
Language catalog: decoding, row projection, and the bulk-copy row source.

All functions in this package are pure (no network or database I/O).
"""

from domain.catalog.copy_source import LanguageCopySource, SourceState
from domain.catalog.models import (
    LANGUAGE_COLUMNS,
    CatalogRow,
    LanguageDefinition,
    LanguageType,
    Nullable,
)
from domain.catalog.parser import parse_catalog
from domain.catalog.projection import ProjectionPolicy, project_catalog, project_language

__all__ = [
    "LANGUAGE_COLUMNS",
    "CatalogRow",
    "LanguageDefinition",
    "LanguageType",
    "Nullable",
    "parse_catalog",
    "ProjectionPolicy",
    "project_language",
    "project_catalog",
    "LanguageCopySource",
    "SourceState",
]
