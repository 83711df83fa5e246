"""Todo repository - data access layer."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import asyncpg

from ..models.todo import Todo

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class TodoStoreError(Exception):
    """Raised when a statement against the todos table fails."""


class TodoRepository:
    """Repository for todo data access backed by a PostgreSQL pool."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @asynccontextmanager
    async def _connection(self, operation: str) -> AsyncIterator[asyncpg.Connection]:
        try:
            async with self._pool.acquire() as conn:
                yield conn
        except _DRIVER_ERRORS as exc:
            logger.exception("Todo store operation '%s' failed", operation)
            raise TodoStoreError(f"{operation} failed") from exc

    async def list_all(self) -> List[Todo]:
        """Return every todo ordered by ascending id."""
        async with self._connection("list") as conn:
            rows = await conn.fetch(
                "SELECT id, text, completed FROM todos ORDER BY id ASC"
            )
        return [Todo.model_validate(dict(row)) for row in rows]

    async def create(self, text: str) -> Todo:
        """Insert a new, not yet completed todo."""
        async with self._connection("create") as conn:
            row = await conn.fetchrow(
                "INSERT INTO todos (text) VALUES ($1) RETURNING id, text, completed",
                text,
            )
        if row is None:
            raise TodoStoreError("create returned no row")
        return Todo.model_validate(dict(row))

    async def set_completed(self, todo_id: int, completed: bool) -> Optional[Todo]:
        """Update the completion flag. Returns None when no row matched."""
        async with self._connection("set_completed") as conn:
            row = await conn.fetchrow(
                "UPDATE todos SET completed = $1 WHERE id = $2 RETURNING id, text, completed",
                completed,
                todo_id,
            )
        if row is None:
            return None
        return Todo.model_validate(dict(row))

    async def delete(self, todo_id: int) -> bool:
        """Delete a todo. Returns False when no row matched."""
        async with self._connection("delete") as conn:
            deleted_id = await conn.fetchval(
                "DELETE FROM todos WHERE id = $1 RETURNING id",
                todo_id,
            )
        return deleted_id is not None
