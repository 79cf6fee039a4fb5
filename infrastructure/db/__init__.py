"""Database access (psycopg 3)."""

from infrastructure.db.postgres import CopySource, connect, copy_rows, count_rows

__all__ = [
    "CopySource",
    "connect",
    "count_rows",
    "copy_rows",
]
