"""Todo service - business logic layer."""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..models.todo import Todo, TodoCreate, TodoUpdate


class TodoStore(Protocol):
    async def list_all(self) -> List[Todo]: ...

    async def create(self, text: str) -> Todo: ...

    async def set_completed(self, todo_id: int, completed: bool) -> Optional[Todo]: ...

    async def delete(self, todo_id: int) -> bool: ...


class TodoService:
    """Service for todo business logic."""

    def __init__(self, repository: TodoStore) -> None:
        self._repository = repository

    async def get_todos(self) -> List[Todo]:
        """Get all todo items ordered by id."""
        return await self._repository.list_all()

    async def create_todo(self, todo_data: TodoCreate) -> Todo:
        """Create a new todo item."""
        if not todo_data.text.strip():
            raise ValueError("Todo text cannot be empty")
        return await self._repository.create(todo_data.text)

    async def set_completed(self, todo_id: int, todo_data: TodoUpdate) -> Optional[Todo]:
        """Update completion of an existing todo."""
        return await self._repository.set_completed(todo_id, todo_data.completed)

    async def delete_todo(self, todo_id: int) -> bool:
        """Delete a todo item."""
        return await self._repository.delete(todo_id)
