import logging

from infrastructure.observability.logging import (
    ContextInjectFilter,
    clear_log_context,
    make_run_tag,
    set_log_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("seer", logging.INFO, __file__, 1, "msg", None, None)


def test_run_tag_is_short_and_stable() -> None:
    tag = make_run_tag("20261017_120000_migrate_languages")

    assert len(tag) == 8
    assert tag == make_run_tag("20261017_120000_migrate_languages")
    assert tag != make_run_tag("20261017_120001_migrate_languages")


def test_filter_injects_context_fields() -> None:
    set_log_context(run_id_full="run-1", table="languages")
    try:
        record = _record()
        assert ContextInjectFilter().filter(record) is True
        assert record.run == make_run_tag("run-1")
        assert record.table == "languages"
    finally:
        clear_log_context()


def test_table_can_change_without_a_new_run() -> None:
    set_log_context(run_id_full="run-2", table="languages")
    set_log_context(table="languages_staging")
    try:
        record = _record()
        ContextInjectFilter().filter(record)
        assert record.run == make_run_tag("run-2")
        assert record.table == "languages_staging"
    finally:
        clear_log_context()


def test_defaults_are_dashes() -> None:
    clear_log_context()
    record = _record()
    ContextInjectFilter().filter(record)

    assert record.run == "-"
    assert record.table == "-"
