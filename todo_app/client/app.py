"""Client-side todo list state.

Holds an in-memory copy of the server list and re-fetches the whole list
after every successful mutation. Failed requests never raise out of the
action methods; they leave a user-facing message in ``error`` instead.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from ..models.todo import Todo
from .api_client import TodoApiClient, TodoApiError

logger = logging.getLogger(__name__)

LOAD_ERROR = "Could not load todos. Check the backend service or network connection."
FORMAT_ERROR = "The server returned todos in an unexpected format."
ADD_ERROR = "Could not add the todo, please try again later."
UPDATE_ERROR = "Could not update the todo, please try again later."
DELETE_ERROR = "Could not delete the todo, please try again later."
NOT_LOADED_ERROR = "That todo is not in the current list."
EMPTY_MESSAGE = "No todos yet, add one!"


class TodoClientApp:
    """Todo list view model driven by the API client."""

    def __init__(self, api: TodoApiClient) -> None:
        self.api = api
        self.todos: List[Todo] = []
        self.new_todo_text = ""
        self.error: Optional[str] = None

    def set_new_todo_text(self, text: str) -> None:
        self.new_todo_text = text

    async def fetch_todos(self) -> None:
        self.error = None
        try:
            payload = await self.api.list_todos()
        except TodoApiError as exc:
            logger.warning("Fetching todos failed: %s", exc)
            self.error = LOAD_ERROR
            self.todos = []
            return

        if not isinstance(payload, list):
            logger.error("Todo list response is not a list: %r", payload)
            self.error = FORMAT_ERROR
            self.todos = []
            return
        try:
            self.todos = [Todo.model_validate(item) for item in payload]
        except ValidationError as exc:
            logger.error("Todo list response has malformed items: %s", exc)
            self.error = FORMAT_ERROR
            self.todos = []

    async def add_todo(self) -> None:
        if not self.new_todo_text.strip():
            return
        self.error = None
        try:
            await self.api.create_todo(self.new_todo_text)
        except TodoApiError as exc:
            logger.warning("Adding todo failed: %s", exc)
            self.error = ADD_ERROR
            return
        self.new_todo_text = ""
        await self.fetch_todos()

    async def toggle_complete(self, todo_id: int, current_status: bool) -> None:
        self.error = None
        try:
            await self.api.update_todo(todo_id, not current_status)
        except TodoApiError as exc:
            logger.warning("Updating todo %s failed: %s", todo_id, exc)
            self.error = UPDATE_ERROR
            return
        await self.fetch_todos()

    async def toggle(self, todo_id: int) -> None:
        """Toggle using the completion state from the last fetched list."""
        todo = self.find(todo_id)
        if todo is None:
            self.error = NOT_LOADED_ERROR
            return
        await self.toggle_complete(todo.id, todo.completed)

    async def delete_todo(self, todo_id: int) -> None:
        self.error = None
        try:
            await self.api.delete_todo(todo_id)
        except TodoApiError as exc:
            logger.warning("Deleting todo %s failed: %s", todo_id, exc)
            self.error = DELETE_ERROR
            return
        await self.fetch_todos()

    def find(self, todo_id: int) -> Optional[Todo]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def render(self) -> str:
        lines = ["Todos", ""]
        if self.error:
            lines.append(f"! {self.error}")
        if not self.todos:
            if not self.error:
                lines.append(EMPTY_MESSAGE)
            return "\n".join(lines)
        for todo in self.todos:
            mark = "x" if todo.completed else " "
            lines.append(f"[{mark}] {todo.text}  (#{todo.id}, delete: 'delete {todo.id}')")
        return "\n".join(lines)
