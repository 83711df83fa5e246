"""Connection pool lifecycle for the todos database.

The pool is created once by the API lifespan and handed to the repository
through FastAPI dependencies; nothing in this module keeps global state.
"""

from __future__ import annotations

import logging

import asyncpg

from .settings import DatabaseSettings

logger = logging.getLogger(__name__)


async def create_pool(settings: DatabaseSettings) -> asyncpg.Pool:
    missing = settings.missing()
    if missing:
        raise RuntimeError(
            f"Missing database configuration: {', '.join(missing)}"
        )
    pool = await asyncpg.create_pool(
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        **settings.connect_kwargs(),
    )
    logger.info(
        "Database pool ready host=%s port=%s database=%s max_size=%s",
        settings.host,
        settings.port,
        settings.database,
        settings.pool_max_size,
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return
    await pool.close()
    logger.info("Database pool closed")
