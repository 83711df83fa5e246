"""Repository tests against a fake asyncpg pool."""

import asyncpg
import pytest

from conftest import FakeConnection, FakePool
from todo_app.models.todo import Todo
from todo_app.repositories.todo_repository import TodoRepository, TodoStoreError


@pytest.mark.asyncio
async def test_list_all_orders_by_id() -> None:
    connection = FakeConnection(
        result=[
            {"id": 1, "text": "first", "completed": False},
            {"id": 2, "text": "second", "completed": True},
        ]
    )
    pool = FakePool(connection)
    repository = TodoRepository(pool)

    todos = await repository.list_all()

    assert todos == [
        Todo(id=1, text="first", completed=False),
        Todo(id=2, text="second", completed=True),
    ]
    method, query, args = connection.calls[0]
    assert method == "fetch"
    assert query == "SELECT id, text, completed FROM todos ORDER BY id ASC"
    assert args == ()
    assert pool.acquired == pool.released == 1


@pytest.mark.asyncio
async def test_list_all_empty() -> None:
    repository = TodoRepository(FakePool(FakeConnection(result=[])))
    assert await repository.list_all() == []


@pytest.mark.asyncio
async def test_create_passes_text_as_parameter() -> None:
    connection = FakeConnection(result={"id": 7, "text": "'; DROP TABLE todos; --", "completed": False})
    repository = TodoRepository(FakePool(connection))

    todo = await repository.create("'; DROP TABLE todos; --")

    assert todo.id == 7
    assert todo.completed is False
    _, query, args = connection.calls[0]
    assert query == "INSERT INTO todos (text) VALUES ($1) RETURNING id, text, completed"
    assert args == ("'; DROP TABLE todos; --",)


@pytest.mark.asyncio
async def test_create_without_returned_row_is_a_store_error() -> None:
    repository = TodoRepository(FakePool(FakeConnection(result=None)))
    with pytest.raises(TodoStoreError):
        await repository.create("lost")


@pytest.mark.asyncio
async def test_set_completed_returns_updated_row() -> None:
    connection = FakeConnection(result={"id": 3, "text": "done", "completed": True})
    repository = TodoRepository(FakePool(connection))

    todo = await repository.set_completed(3, True)

    assert todo == Todo(id=3, text="done", completed=True)
    _, query, args = connection.calls[0]
    assert query.startswith("UPDATE todos SET completed = $1 WHERE id = $2")
    assert args == (True, 3)


@pytest.mark.asyncio
async def test_set_completed_not_found() -> None:
    repository = TodoRepository(FakePool(FakeConnection(result=None)))
    assert await repository.set_completed(999, True) is None


@pytest.mark.asyncio
async def test_delete_reports_match() -> None:
    connection = FakeConnection(result=4)
    repository = TodoRepository(FakePool(connection))

    assert await repository.delete(4) is True
    _, query, args = connection.calls[0]
    assert query == "DELETE FROM todos WHERE id = $1 RETURNING id"
    assert args == (4,)


@pytest.mark.asyncio
async def test_delete_not_found() -> None:
    repository = TodoRepository(FakePool(FakeConnection(result=None)))
    assert await repository.delete(4) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        ConnectionRefusedError("connection refused"),
        asyncpg.InterfaceError("pool is closed"),
        TimeoutError(),
    ],
)
async def test_driver_errors_become_store_errors_and_release(error) -> None:
    pool = FakePool(FakeConnection(error=error))
    repository = TodoRepository(pool)

    with pytest.raises(TodoStoreError) as excinfo:
        await repository.list_all()

    assert excinfo.value.__cause__ is error
    assert pool.acquired == pool.released == 1


@pytest.mark.asyncio
async def test_unrelated_errors_propagate_unchanged() -> None:
    pool = FakePool(FakeConnection(error=KeyError("bug")))
    repository = TodoRepository(pool)

    with pytest.raises(KeyError):
        await repository.delete(1)
    assert pool.released == 1
