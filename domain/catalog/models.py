"""Pydantic models for catalog entries and their storage rows."""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Wire contract with the bulk-copy call; order matters.
LANGUAGE_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "fs_name",
    "type",
    "aliases",
    "ace_mode",
    "codemirror_mode",
    "codemirror_mime_type",
    "wrap",
    "extensions",
    "filenames",
    "interpreters",
    "language_id",
    "color",
    "tm_scope",
    "group",
)

_OPTIONAL_TEXT_FIELDS = (
    "fs_name",
    "type",
    "ace_mode",
    "codemirror_mode",
    "codemirror_mime_type",
    "color",
    "tm_scope",
    "group",
)
_LIST_FIELDS = ("aliases", "extensions", "filenames", "interpreters")

T = TypeVar("T")


class LanguageType(str, Enum):
    """Storage enumeration for a language category. DATA is the zero member."""

    DATA = "data"
    PROGRAMMING = "programming"
    MARKUP = "markup"
    PROSE = "prose"


class LanguageDefinition(BaseModel):
    """One decoded entry of the Linguist catalog.

    Unknown upstream fields are ignored. Optional strings default to "" and
    a YAML null decodes the same way as an absent key.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    # Taken from the mapping key, never from the value itself
    name: str = ""
    # Only set when the language name is not a valid filename
    fs_name: str = ""
    # data, programming, markup, prose, or empty
    type: str = ""
    aliases: list[str] = Field(default_factory=list)
    ace_mode: str = ""
    codemirror_mode: str = ""
    codemirror_mime_type: str = ""
    wrap: bool = False
    # First entry is the primary extension
    extensions: list[str] = Field(default_factory=list)
    filenames: list[str] = Field(default_factory=list)
    interpreters: list[str] = Field(default_factory=list)
    language_id: int = Field(..., ge=INT32_MIN, le=INT32_MAX)
    color: str = ""
    tm_scope: str = ""
    group: str = ""

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def _null_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def _null_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("wrap", mode="before")
    @classmethod
    def _null_wrap(cls, v: Any) -> Any:
        return False if v is None else v


class Nullable(BaseModel, Generic[T]):
    """Presence marker: distinguishes "no value" from an empty backing value."""

    model_config = ConfigDict(frozen=True)

    value: T
    present: bool = False

    def db_value(self) -> T | None:
        return self.value if self.present else None


def text_or_absent(value: str) -> Nullable[str]:
    """Empty string is absent, anything else is present."""
    if value:
        return Nullable[str](value=value, present=True)
    return Nullable[str](value="", present=False)


class CatalogRow(BaseModel):
    """Storage-ready projection of a LanguageDefinition.

    The row identifier is not part of the row; the copy source assigns it at
    stream time.
    """

    name: str
    fs_name: Nullable[str]
    type: Nullable[LanguageType]
    aliases: list[str] = Field(default_factory=list)
    ace_mode: Nullable[str]
    codemirror_mode: Nullable[str]
    codemirror_mime_type: Nullable[str]
    wrap: Nullable[bool]
    extensions: list[str] = Field(default_factory=list)
    filenames: list[str] = Field(default_factory=list)
    interpreters: list[str] = Field(default_factory=list)
    language_id: int
    color: Nullable[str]
    tm_scope: Nullable[str]
    group: Nullable[str]

    def copy_values(self, row_id: int) -> tuple[Any, ...]:
        """Return the row as database values, ordered by LANGUAGE_COLUMNS."""
        category = self.type.db_value()
        by_column: dict[str, Any] = {
            "id": row_id,
            "name": self.name,
            "fs_name": self.fs_name.db_value(),
            "type": category.value if category is not None else None,
            "aliases": list(self.aliases),
            "ace_mode": self.ace_mode.db_value(),
            "codemirror_mode": self.codemirror_mode.db_value(),
            "codemirror_mime_type": self.codemirror_mime_type.db_value(),
            "wrap": self.wrap.db_value(),
            "extensions": list(self.extensions),
            "filenames": list(self.filenames),
            "interpreters": list(self.interpreters),
            "language_id": self.language_id,
            "color": self.color.db_value(),
            "tm_scope": self.tm_scope.db_value(),
            "group": self.group.db_value(),
        }
        return tuple(by_column[column] for column in LANGUAGE_COLUMNS)

    def log_fields(self, row_id: int) -> dict[str, Any]:
        """Flat column -> value mapping for structured log lines."""
        return dict(zip(LANGUAGE_COLUMNS, self.copy_values(row_id)))
