"""PostgreSQL access: connection, row count, and COPY-based bulk load."""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

import psycopg
from psycopg import sql

from domain.errors import CountError, LoadError
from infrastructure.config.models import AppConfig

logger = logging.getLogger(__name__)


class CopySource(Protocol):
    """Three-operation contract pulled by copy_rows()."""

    def advance(self) -> bool: ...

    def current(self) -> Sequence[Any]: ...

    def err(self) -> Exception | None: ...


def connect(
    cfg: AppConfig,
    *,
    statement_timeout_ms: int | None = None,
    connect_timeout_s: int | None = None,
) -> psycopg.Connection:
    """
    Open a connection from config. The caller owns it and must close it.

    The connection is in autocommit mode so that copy_rows()' transaction()
    block is a real transaction rather than a savepoint inside an implicit one.

    Args:
        cfg: Application config (db.auth must be complete)
        statement_timeout_ms: Optional server-side deadline per statement
        connect_timeout_s: Overrides cfg.db.connect_timeout_s when given
    """
    timeout_s = cfg.db.connect_timeout_s if connect_timeout_s is None else connect_timeout_s
    kwargs: dict[str, Any] = {"connect_timeout": timeout_s, "autocommit": True}
    if statement_timeout_ms is not None:
        kwargs["options"] = f"-c statement_timeout={int(statement_timeout_ms)}"

    conn = psycopg.connect(cfg.database_url(), **kwargs)
    logger.info(
        "Connected to PostgreSQL: %s:%s/%s",
        cfg.db.auth.host,
        cfg.db.auth.port,
        cfg.db.auth.database,
    )
    return conn


def count_rows(conn: psycopg.Connection, table: str) -> int:
    """
    Return the current row count of a table.

    Raises:
        CountError: If the query fails
    """
    query = sql.SQL("SELECT count(*) FROM {}").format(sql.Identifier(table))
    try:
        row = conn.execute(query).fetchone()
    except psycopg.Error as e:
        raise CountError(table, str(e)) from e

    count = int(row[0]) if row else 0
    logger.info("Table %s has %d rows", table, count)
    return count


def copy_rows(
    conn: psycopg.Connection,
    table: str,
    columns: Sequence[str],
    source: CopySource,
    *,
    timeout_ms: int | None = None,
) -> int:
    """
    Stream every row of `source` into `table` with COPY ... FROM STDIN.

    The copy runs inside conn.transaction(). A terminal error reported by
    source.err() aborts the copy and rolls it back.

    Args:
        conn: Open connection (not owned)
        table: Target table name
        columns: Ordered column list; must match the order of source.current()
        source: Row source following the advance/current/err contract
        timeout_ms: Time left for the copy; applied with SET LOCAL statement_timeout

    Returns:
        Number of rows written

    Raises:
        LoadError: On a database failure, a source error, or an exhausted timeout
    """
    if timeout_ms is not None and timeout_ms <= 0:
        raise LoadError(table, "deadline exceeded before the copy started")

    query = sql.SQL("COPY {table} ({columns}) FROM STDIN").format(
        table=sql.Identifier(table),
        columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
    )

    written = 0
    try:
        with conn.transaction():
            with conn.cursor() as cur:
                if timeout_ms is not None:
                    # SET does not take bind parameters
                    cur.execute(sql.SQL("SET LOCAL statement_timeout = {}").format(sql.Literal(int(timeout_ms))))
                with cur.copy(query) as copy:
                    while source.advance():
                        copy.write_row(source.current())
                        written += 1
                    source_err = source.err()
                    if source_err is not None:
                        raise LoadError(table, f"row source failed: {source_err}", row_index=written) from source_err
    except psycopg.Error as e:
        raise LoadError(table, str(e), row_index=written) from e

    logger.info("Copied %d rows into %s", written, table)
    return written
