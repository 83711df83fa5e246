"""Create the todos database and table if they do not exist yet.

Usage:
  todo-setup-db            # reads PGHOST, PGPORT, PGUSER, PGPASSWORD, PGDATABASE
  python -m todo_app.schema

Safe to run repeatedly: an existing database is skipped and the table is
created with ``IF NOT EXISTS``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional

import asyncpg

from .logging_utils import configure_logging
from .settings import DatabaseSettings, get_database_settings

logger = logging.getLogger(__name__)

CREATE_TODOS_TABLE = """
CREATE TABLE IF NOT EXISTS todos (
    id SERIAL PRIMARY KEY,
    text VARCHAR(255) NOT NULL CHECK (length(btrim(text)) > 0),
    completed BOOLEAN NOT NULL DEFAULT FALSE
);
"""


class SchemaInitError(RuntimeError):
    """Raised when the database or table cannot be prepared."""


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


async def ensure_database(settings: DatabaseSettings) -> bool:
    """Create the target database. Returns False when it already existed."""
    target = settings.database
    logger.info(
        "Connecting to administrative database '%s' at %s:%s",
        settings.admin_database,
        settings.host,
        settings.port,
    )
    try:
        conn = await asyncpg.connect(**settings.connect_kwargs(database=settings.admin_database))
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        raise SchemaInitError(
            f"Could not connect to '{settings.admin_database}': {exc}"
        ) from exc

    try:
        await conn.execute(f"CREATE DATABASE {quote_identifier(target)}")
    except asyncpg.DuplicateDatabaseError:
        logger.info("Database '%s' already exists, skipping creation", target)
        return False
    except asyncpg.PostgresError as exc:
        raise SchemaInitError(f"Could not create database '{target}': {exc}") from exc
    finally:
        await conn.close()

    logger.info("Database '%s' created", target)
    return True


async def ensure_table(settings: DatabaseSettings) -> None:
    logger.info("Connecting to target database '%s'", settings.database)
    try:
        conn = await asyncpg.connect(**settings.connect_kwargs())
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        raise SchemaInitError(
            f"Could not connect to '{settings.database}': {exc}"
        ) from exc

    try:
        await conn.execute(CREATE_TODOS_TABLE)
    except asyncpg.PostgresError as exc:
        raise SchemaInitError(f"Could not create table 'todos': {exc}") from exc
    finally:
        await conn.close()

    logger.info("Table 'todos' created or already present")


async def initialize_schema(settings: Optional[DatabaseSettings] = None) -> None:
    settings = settings or get_database_settings()
    missing = settings.missing()
    if missing:
        raise SchemaInitError(
            f"Missing database configuration: {', '.join(missing)}"
        )
    await ensure_database(settings)
    await ensure_table(settings)
    logger.info("Database setup complete")


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description="Create the todos database and table if they are missing."
    )


def main(argv: list[str] | None = None) -> int:
    build_parser().parse_args(argv)
    configure_logging()
    try:
        asyncio.run(initialize_schema())
    except SchemaInitError as exc:
        logger.error("Database setup failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
