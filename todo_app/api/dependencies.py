"""API dependencies for todo management."""

import asyncpg
from fastapi import Depends, HTTPException, Request

from ..repositories.todo_repository import TodoRepository
from ..services.todo_service import TodoService


def get_pool(request: Request) -> asyncpg.Pool:
    """Dependency for the pool created by the application lifespan."""
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise HTTPException(status_code=503, detail="Database is not ready")
    return pool


def get_todo_repository(pool: asyncpg.Pool = Depends(get_pool)) -> TodoRepository:
    """Dependency for getting todo repository instance."""
    return TodoRepository(pool)


def get_todo_service(
    repository: TodoRepository = Depends(get_todo_repository),
) -> TodoService:
    """Dependency for getting todo service instance."""
    return TodoService(repository)
