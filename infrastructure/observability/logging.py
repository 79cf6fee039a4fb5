"""
Console and rotating-file logging for catalog loads.

Every record carries two context fields, set once per run by the CLI:
`run`, a short tag hashed from the run id, and `table`, the table being
seeded. Both read "-" outside a run.
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

UNSET = "-"

# Loggers that are chatty at INFO; only their warnings are kept
QUIET_LOGGERS = ("httpx", "httpcore", "psycopg")

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] r=%(run)s t=%(table)s | %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s | r=%(run)s t=%(table)s | %(message)s"

cv_run_tag = contextvars.ContextVar("run_tag", default=UNSET)
cv_table = contextvars.ContextVar("table", default=UNSET)


def make_run_tag(run_id_full: str, length: int = 8) -> str:
    """Short hex tag for a run id; the same id always gives the same tag."""
    digest = hashlib.blake2s(run_id_full.encode("utf-8"), digest_size=8)
    return digest.hexdigest()[:length]


class ContextInjectFilter(logging.Filter):
    """Stamp `run` and `table` onto each record so the formats can use them."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run = cv_run_tag.get() or UNSET
        record.table = cv_table.get() or UNSET
        return True


def set_log_context(*, run_id_full: str | None = None, table: str | None = None) -> None:
    """Tag subsequent log lines with a run and/or a target table."""
    if run_id_full is not None:
        cv_run_tag.set(make_run_tag(str(run_id_full)))
    if table is not None:
        cv_table.set(str(table))


def clear_log_context() -> None:
    """Drop the run and table tags once a command finishes."""
    cv_run_tag.set(UNSET)
    cv_table.set(UNSET)


def _attach(
    root: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
    ctx_filter: logging.Filter,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ctx_filter)
    root.addHandler(handler)


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,
    backup_count: int = 5,
) -> None:
    """
    Install the console handler and, when `log_file` is given, a rotating file
    handler. Safe to call again: previously installed root handlers are removed.

    Args:
        log_file: Rotating log file, or None to log to the console only
        console_level: Threshold for the console handler
        file_level: Threshold for the file handler
        max_bytes: Size at which the file rolls over
        backup_count: Rolled-over files kept next to log_file
    """
    root = logging.getLogger()
    root.handlers.clear()
    # handlers do the filtering
    root.setLevel(logging.DEBUG)

    ctx_filter = ContextInjectFilter()
    _attach(
        root,
        logging.StreamHandler(),
        console_level,
        logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"),
        ctx_filter,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(
            root,
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"),
            file_level,
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"),
            ctx_filter,
        )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        log_file if log_file is not None else "none",
    )
