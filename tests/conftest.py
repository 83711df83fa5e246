"""Shared fixtures: in-memory store and fake asyncpg objects."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from todo_app.api.dependencies import get_todo_repository  # noqa: E402
from todo_app.main import app  # noqa: E402
from todo_app.models.todo import Todo  # noqa: E402
from todo_app.repositories.todo_repository import TodoStoreError  # noqa: E402


class InMemoryTodoRepository:
    """Stand-in for the PostgreSQL repository with the same contract."""

    def __init__(self) -> None:
        self._todos: Dict[int, Todo] = {}
        self._next_id = 1

    async def list_all(self) -> List[Todo]:
        return [self._todos[todo_id] for todo_id in sorted(self._todos)]

    async def create(self, text: str) -> Todo:
        todo = Todo(id=self._next_id, text=text, completed=False)
        self._todos[self._next_id] = todo
        self._next_id += 1
        return todo

    async def set_completed(self, todo_id: int, completed: bool) -> Optional[Todo]:
        todo = self._todos.get(todo_id)
        if not todo:
            return None
        updated = todo.model_copy(update={"completed": completed})
        self._todos[todo_id] = updated
        return updated

    async def delete(self, todo_id: int) -> bool:
        if todo_id in self._todos:
            del self._todos[todo_id]
            return True
        return False

    def clear(self) -> None:
        self._todos.clear()
        self._next_id = 1


class FailingTodoRepository:
    """Every operation fails the way a lost database connection would."""

    async def list_all(self):
        raise TodoStoreError("list failed")

    async def create(self, text):
        raise TodoStoreError("create failed")

    async def set_completed(self, todo_id, completed):
        raise TodoStoreError("set_completed failed")

    async def delete(self, todo_id):
        raise TodoStoreError("delete failed")


class FakeConnection:
    """Records statements and returns canned results."""

    def __init__(self, result: Any = None, error: Optional[BaseException] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    async def close(self) -> None:
        self.closed = True

    async def _run(self, method: str, query: str, args: tuple) -> Any:
        self.calls.append((method, " ".join(query.split()), args))
        if self.error is not None:
            raise self.error
        return self.result

    async def fetch(self, query: str, *args: Any) -> Any:
        return await self._run("fetch", query, args)

    async def fetchrow(self, query: str, *args: Any) -> Any:
        return await self._run("fetchrow", query, args)

    async def fetchval(self, query: str, *args: Any) -> Any:
        return await self._run("fetchval", query, args)

    async def execute(self, query: str, *args: Any) -> Any:
        return await self._run("execute", query, args)


class _Acquire:
    def __init__(self, pool: "FakePool") -> None:
        self._pool = pool

    async def __aenter__(self) -> FakeConnection:
        self._pool.acquired += 1
        return self._pool.connection

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._pool.released += 1
        return False


class FakePool:
    def __init__(self, connection: FakeConnection) -> None:
        self.connection = connection
        self.acquired = 0
        self.released = 0
        self.closed = False

    def acquire(self) -> _Acquire:
        return _Acquire(self)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()


@pytest.fixture
def client(repository: InMemoryTodoRepository):
    """API test client backed by the in-memory repository."""
    app.dependency_overrides[get_todo_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_todo_repository] = lambda: FailingTodoRepository()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def api_repository(repository: InMemoryTodoRepository):
    """Wire the in-memory repository into the app for httpx-based clients."""
    app.dependency_overrides[get_todo_repository] = lambda: repository
    yield repository
    app.dependency_overrides.clear()
