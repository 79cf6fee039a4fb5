"""
Observability: logging for catalog loads.

Provides:
- Run tag and target table on every log line
- Console output plus an optional rotating log file
- Quieter third-party loggers (httpx, psycopg)
"""

from infrastructure.observability.logging import (
    clear_log_context,
    configure_logging,
    make_run_tag,
    set_log_context,
)

__all__ = [
    "configure_logging",
    "set_log_context",
    "clear_log_context",
    "make_run_tag",
]
