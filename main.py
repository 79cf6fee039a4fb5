"""
CLI entrypoint for seeding the languages table.

`migrate` performs the following steps:
- loads .env and configs/config.yaml (plus SEER_* overrides)
- configures logging
- starts one deadline of --timeout-ms shared by every later step
- opens the database connection and an HTTP client within that deadline
- loads the Linguist catalog into the target table if it is empty
- closes both resources

Schema migrations themselves are applied by an external migration runner
before this command runs.

`init-config` writes the resolved configuration to disk.
"""

import argparse
import logging
import math
from datetime import datetime
from pathlib import Path

import httpx
import psycopg
from dotenv import load_dotenv

from application import run_if_empty
from domain.errors import ConfigError, IngestionError
from infrastructure.config import load_app_config, write_config_snapshot
from infrastructure.constants import CONFIG_FILE, DEFAULT_TIMEOUT_MS, ENV_FILE
from infrastructure.db import connect
from infrastructure.deadline import Deadline
from infrastructure.observability import clear_log_context, configure_logging, make_run_tag, set_log_context

logger = logging.getLogger(__name__)

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed the languages table from GitHub Linguist")
    p.add_argument(
        "--config",
        type=str,
        default=str(CONFIG_FILE),
        help="Path to config.yaml (default: configs/config.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=str(ENV_FILE),
        help="Path to .env file (default: .env; skipped if missing)",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=_LEVELS,
        help="Console log level",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional rotating log file (DEBUG and above)",
    )
    sub = p.add_subparsers(dest="command", required=True)

    m = sub.add_parser("migrate", help="Load the language catalog into an empty table")
    m.add_argument(
        "--catalog-url",
        "--linguist-language-remote-path",
        dest="catalog_url",
        type=str,
        default=None,
        help="Remote path to linguist languages.yml (default: from config)",
    )
    m.add_argument(
        "--timeout-ms",
        type=int,
        default=DEFAULT_TIMEOUT_MS,
        help="Deadline for the whole run: connect, catalog download and copy",
    )

    c = sub.add_parser("init-config", help="Write the resolved configuration to --config")
    c.add_argument(
        "--include-password",
        action="store_true",
        help="Keep the database password in the written file",
    )
    c.add_argument(
        "--force",
        action="store_true",
        help="Overwrite --config if it already exists",
    )
    return p.parse_args(argv)


def _migrate(args: argparse.Namespace) -> int:
    cfg = load_app_config(Path(args.config))
    url = args.catalog_url or cfg.catalog.url
    table = cfg.catalog.table

    run_id = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_migrate_{table}"
    set_log_context(run_id_full=run_id, table=table)
    logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))

    deadline = Deadline(args.timeout_ms / 1000)
    conn = connect(
        cfg,
        statement_timeout_ms=deadline.remaining_ms(),
        connect_timeout_s=max(1, min(cfg.db.connect_timeout_s, math.ceil(deadline.remaining()))),
    )
    try:
        with httpx.Client(timeout=deadline.remaining(), follow_redirects=True) as client:
            result = run_if_empty(conn, client, url, table=table, policy=cfg.catalog.compat, deadline=deadline)
    finally:
        conn.close()
        logger.debug("Database connection closed")

    if result.loaded:
        logger.info("Inserted %d languages into %s", result.rows_written, table)
    else:
        logger.info("Nothing to do: %s already holds %d rows", table, result.existing_rows)
    return 0


def _init_config(args: argparse.Namespace) -> int:
    path = Path(args.config)
    if path.exists() and not args.force:
        logger.error("%s already exists; pass --force to overwrite it", path)
        return 1
    cfg = load_app_config(path)
    write_config_snapshot(cfg, path, include_password=bool(args.include_password))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    configure_logging(
        log_file=Path(args.log_file) if args.log_file else None,
        console_level=getattr(logging, args.console_level),
    )

    try:
        if args.command == "migrate":
            return _migrate(args)
        return _init_config(args)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
    except IngestionError as e:
        logger.error("Catalog load failed: %s", e)
    except psycopg.OperationalError as e:
        logger.error("Failed to initialize database: %s", e)
    except Exception:
        logger.exception("Unexpected failure in %s", args.command)
        raise
    finally:
        clear_log_context()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
