"""Error taxonomy for a catalog ingestion run.

Every error is terminal for the current run; nothing is retried internally.
"""


class IngestionError(Exception):
    """Base class for failures that abort an ingestion run."""


class FetchError(IngestionError):
    """Request construction or transport failure while downloading the catalog."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Failed to fetch catalog from {url}: {message}")
        self.url = url


class ParseError(IngestionError):
    """Malformed top-level document, or a single entry failing its typed decode."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        if key is not None:
            message = f"Catalog entry {key!r}: {message}"
        super().__init__(message)
        self.key = key


class ProjectionError(IngestionError):
    """A language definition that cannot be mapped onto the row schema."""

    def __init__(self, name: str, category: str) -> None:
        super().__init__(f"Language {name!r} has unrecognized category {category!r}")
        self.name = name
        self.category = category


class LoadError(IngestionError):
    """Bulk-copy failure, including a terminal error reported by the row source."""

    def __init__(self, table: str, message: str, *, row_index: int | None = None) -> None:
        where = f"{table}" if row_index is None else f"{table} (row {row_index})"
        super().__init__(f"Bulk copy into {where} failed: {message}")
        self.table = table
        self.row_index = row_index


class CopySourceStateError(LoadError):
    """The copy source was asked for a row while not positioned on one."""

    def __init__(self, table: str, state: str) -> None:
        super().__init__(table, f"no current row (source is {state})")
        self.state = state


class CountError(IngestionError):
    """Row-count query against the target table failed."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(f"Failed to count rows in {table}: {message}")
        self.table = table


class ConfigError(ValueError):
    """Invalid or incomplete application configuration."""
