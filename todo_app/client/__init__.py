"""Todo list client: HTTP wrapper, list state and command line."""

from .api_client import TodoApiClient, TodoApiError
from .app import TodoClientApp

__all__ = [
    "TodoApiClient",
    "TodoApiError",
    "TodoClientApp",
]
