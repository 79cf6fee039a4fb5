"""Decode the Linguist languages document into typed definitions."""

import logging
from typing import Any

import yaml
from pydantic import ValidationError

from domain.catalog.models import LanguageDefinition
from domain.errors import ParseError

logger = logging.getLogger(__name__)


def _load_mapping(data: bytes) -> dict[Any, Any]:
    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to decode catalog document: {e}") from e

    # An empty document is an empty catalog
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ParseError(f"Expected a mapping of language name -> fields, got {type(doc).__name__}")
    return doc


def decode_entry(key: str, value: Any) -> LanguageDefinition:
    """
    Decode one catalog value into a LanguageDefinition named after its key.

    Fields unknown to LanguageDefinition are dropped. Any ``name`` carried by the
    value itself is overwritten by the mapping key.

    Raises:
        ParseError: If the value is not a mapping or fails typed validation
    """
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise ParseError(f"expected a mapping, got {type(value).__name__}", key=key)

    try:
        definition = LanguageDefinition.model_validate(value)
    except ValidationError as e:
        raise ParseError(f"invalid language definition: {e}", key=key) from e

    definition.name = key
    return definition


def parse_catalog(data: bytes) -> list[LanguageDefinition]:
    """
    Parse raw catalog bytes into language definitions.

    Decoding happens in two passes: the document is first loaded as a generic
    mapping so new upstream fields never break it, then each entry is decoded
    into the fixed LanguageDefinition shape.

    The result is sorted by canonical name. Row identifiers are assigned
    positionally downstream, so this ordering is what keeps them stable for a
    given document.

    Args:
        data: Raw YAML bytes

    Returns:
        Language definitions, one per top-level key, sorted by name

    Raises:
        ParseError: If the document is malformed, a top-level key is not a
            string, or any single entry fails to decode. No partial catalog
            is returned.
    """
    mapping = _load_mapping(data)

    definitions = []
    for key, value in mapping.items():
        # YAML turns bare keys such as `true`, `~` or `1.0` into non-strings
        if not isinstance(key, str):
            raise ParseError(f"language name must be a string, got {type(key).__name__}", key=repr(key))
        definitions.append(decode_entry(key, value))
    definitions.sort(key=lambda d: d.name)

    logger.info("Parsed %d language definitions", len(definitions))
    return definitions
