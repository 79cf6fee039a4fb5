"""Seed the languages table from the Linguist catalog."""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import BaseModel

from domain.catalog import LANGUAGE_COLUMNS, LanguageCopySource, ProjectionPolicy, parse_catalog, project_catalog
from infrastructure.constants import DEFAULT_TABLE
from infrastructure.db import copy_rows, count_rows
from infrastructure.deadline import Deadline
from infrastructure.remote import fetch_catalog

logger = logging.getLogger(__name__)

RowCounter = Callable[[Any, str], int]
RowLoader = Callable[..., int]
CatalogFetcher = Callable[..., bytes]


class IngestionResult(BaseModel):
    """Outcome of one run_if_empty() call."""

    table: str
    loaded: bool
    existing_rows: int
    rows_written: int = 0


def run_if_empty(
    conn: Any,
    client: httpx.Client,
    url: str,
    *,
    table: str = DEFAULT_TABLE,
    policy: ProjectionPolicy | None = None,
    counter: RowCounter = count_rows,
    loader: RowLoader = copy_rows,
    fetcher: CatalogFetcher = fetch_catalog,
    deadline: Deadline | None = None,
) -> IngestionResult:
    """
    Load the catalog into `table` if, and only if, the table is empty.

    Runs Fetch -> Parse -> Project -> bulk copy, stopping at the first error.
    The emptiness check and the copy are separate statements: two concurrent
    runs can both see an empty table and both load it.

    Args:
        conn: Open database connection (not owned)
        client: HTTP client used for the single catalog GET (not owned)
        url: Remote catalog location
        table: Target table
        policy: Projection compatibility switches
        counter: Row-count primitive
        loader: Bulk-copy primitive
        fetcher: Catalog download primitive
        deadline: Shared run deadline; the fetch and the copy each get the time
            left when they start

    Returns:
        IngestionResult describing what happened

    Raises:
        IngestionError: CountError, FetchError, ParseError, ProjectionError or LoadError
    """
    existing = counter(conn, table)
    if existing != 0:
        logger.info("Table %s already has %d rows; skipping catalog load", table, existing)
        return IngestionResult(table=table, loaded=False, existing_rows=existing)

    raw = fetcher(client, url, deadline=deadline)
    definitions = parse_catalog(raw)
    rows = project_catalog(definitions, policy)
    logger.info("Projected %d rows for %s", len(rows), table)

    source = LanguageCopySource(rows, table=table)
    timeout_ms = deadline.remaining_ms() if deadline is not None else None
    written = loader(conn, table, LANGUAGE_COLUMNS, source, timeout_ms=timeout_ms)

    logger.info("Loaded %d languages into %s", written, table)
    return IngestionResult(table=table, loaded=True, existing_rows=0, rows_written=written)
