import pytest

from domain.catalog.parser import decode_entry, parse_catalog
from domain.errors import ParseError

TWO_LANGUAGES = b"""
Rust:
  language_id: 2
  type: programming
Go:
  language_id: 1
  type: programming
"""


def test_two_entry_document_yields_both_names() -> None:
    defs = parse_catalog(TWO_LANGUAGES)

    assert [d.name for d in defs] == ["Go", "Rust"]
    assert [d.language_id for d in defs] == [1, 2]
    assert all(d.type == "programming" for d in defs)


def test_mapping_key_overwrites_name_inside_value() -> None:
    defs = parse_catalog(b"C++:\n  name: cpp\n  language_id: 43\n")

    assert len(defs) == 1
    assert defs[0].name == "C++"


def test_unknown_fields_are_dropped() -> None:
    doc = b"""
Python:
  language_id: 303
  type: programming
  color: "#3572A5"
  some_future_field: [1, 2, 3]
  another: {nested: true}
"""
    (python,) = parse_catalog(doc)

    assert python.color == "#3572A5"
    assert not hasattr(python, "some_future_field")


def test_missing_optional_fields_take_defaults() -> None:
    (lang,) = parse_catalog(b"Text:\n  language_id: 372\n")

    assert lang.fs_name == ""
    assert lang.type == ""
    assert lang.aliases == []
    assert lang.extensions == []
    assert lang.wrap is False


def test_null_values_decode_like_absent_keys() -> None:
    doc = b"""
Shell:
  language_id: 346
  ace_mode: ~
  aliases: ~
  wrap: ~
"""
    (shell,) = parse_catalog(doc)

    assert shell.ace_mode == ""
    assert shell.aliases == []
    assert shell.wrap is False


def test_lists_keep_document_order() -> None:
    doc = b"""
Shell:
  language_id: 346
  extensions: [".sh", ".bash", ".zsh"]
  interpreters: [bash, sh, zsh]
"""
    (shell,) = parse_catalog(doc)

    assert shell.extensions == [".sh", ".bash", ".zsh"]
    assert shell.interpreters == ["bash", "sh", "zsh"]


def test_empty_document_is_empty_catalog() -> None:
    assert parse_catalog(b"") == []


def test_malformed_yaml_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_catalog(b"Go: {language_id: 1\n")


def test_top_level_list_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="Expected a mapping"):
        parse_catalog(b"- Go\n- Rust\n")


def test_one_bad_entry_aborts_whole_parse() -> None:
    doc = b"""
Go:
  language_id: 1
Broken:
  language_id: not-a-number
"""
    with pytest.raises(ParseError) as exc_info:
        parse_catalog(doc)

    assert exc_info.value.key == "Broken"


def test_missing_language_id_is_rejected() -> None:
    with pytest.raises(ParseError) as exc_info:
        decode_entry("Go", {"type": "programming"})

    assert exc_info.value.key == "Go"


def test_scalar_entry_is_rejected() -> None:
    with pytest.raises(ParseError, match="expected a mapping"):
        decode_entry("Go", "programming")


@pytest.mark.parametrize(
    ("doc", "key"),
    [
        (b"true:\n  language_id: 1\n", "True"),
        (b"~:\n  language_id: 1\n", "None"),
        (b"1.0:\n  language_id: 1\n", "1.0"),
    ],
)
def test_non_string_language_name_is_rejected(doc: bytes, key: str) -> None:
    with pytest.raises(ParseError, match="language name must be a string") as exc_info:
        parse_catalog(doc)

    assert exc_info.value.key == key


def test_quoted_keys_stay_strings() -> None:
    definitions = parse_catalog(b"'true':\n  language_id: 1\n'1.0':\n  language_id: 2\n")

    assert [d.name for d in definitions] == ["1.0", "true"]
