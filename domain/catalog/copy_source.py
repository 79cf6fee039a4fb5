"""Pull-based row source consumed by the bulk-copy primitive."""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

from domain.catalog.models import INT32_MAX, CatalogRow
from domain.errors import CopySourceStateError, LoadError

logger = logging.getLogger(__name__)

# Row identifiers are stored as int32
MAX_ROW_ID = INT32_MAX


class SourceState(str, Enum):
    UNSTARTED = "unstarted"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"


class LanguageCopySource:
    """
    Cursor over projected rows with an advance / current / err contract.

    The index starts before the first row and advance() increments it before
    checking for exhaustion, so the first catalog row gets id 0 and every row is
    visited exactly once. Only the current row is held; earlier rows are
    released as the cursor moves on.
    """

    def __init__(self, rows: Iterable[CatalogRow], *, table: str = "languages") -> None:
        self._rows: Iterator[CatalogRow] = iter(rows)
        self._table = table
        self._index = -1
        self._row: CatalogRow | None = None
        self._state = SourceState.UNSTARTED
        self._err: Exception | None = None

    @property
    def state(self) -> SourceState:
        return self._state

    @property
    def index(self) -> int:
        """Position of the current row (-1 before the first advance)."""
        return self._index

    def advance(self) -> bool:
        """Move to the next row. Returns False once no row is available."""
        if self._state is SourceState.EXHAUSTED:
            return False

        self._row = None
        next_index = self._index + 1
        if next_index > MAX_ROW_ID:
            self._fail(LoadError(self._table, f"row id {next_index} exceeds int32 range", row_index=next_index))
            return False

        try:
            row = next(self._rows)
        except StopIteration:
            self._state = SourceState.EXHAUSTED
            return False
        except Exception as e:
            self._fail(e)
            return False

        self._index = next_index
        self._row = row
        self._state = SourceState.POSITIONED
        return True

    def current(self) -> tuple[Any, ...]:
        """
        Values of the current row, ordered by LANGUAGE_COLUMNS.

        Raises:
            CopySourceStateError: Before the first successful advance() or after
                advance() returned False
        """
        if self._state is not SourceState.POSITIONED or self._row is None:
            raise CopySourceStateError(self._table, self._state.value)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Yielding row: %s", self._row.log_fields(self._index))
        return self._row.copy_values(self._index)

    def err(self) -> Exception | None:
        """Terminal error that must abort the enclosing copy, or None."""
        return self._err

    def _fail(self, error: Exception) -> None:
        logger.error("Copy source for %s stopped at row %d: %s", self._table, self._index + 1, error)
        self._err = error
        self._row = None
        self._state = SourceState.EXHAUSTED
