"""HTTP client for the todo API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class TodoApiError(Exception):
    """Raised when a request fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TodoApiClient:
    """Thin wrapper around the four todo endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds),
        )

    async def __aenter__(self) -> "TodoApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.aclose()
        return False

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TodoApiError(
                f"{method} {url} failed ({status}): {_error_text(exc.response)}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise TodoApiError(f"{method} {url} failed: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise TodoApiError(f"{method} {url} returned invalid JSON") from exc

    async def list_todos(self) -> Any:
        """Return the decoded list payload; its shape is checked by the caller."""
        return await self._request("GET", "/api/todos")

    async def create_todo(self, text: str) -> Dict[str, Any]:
        return await self._request("POST", "/api/todos", json={"text": text})

    async def update_todo(self, todo_id: int, completed: bool) -> Dict[str, Any]:
        return await self._request("PUT", f"/api/todos/{todo_id}", json={"completed": completed})

    async def delete_todo(self, todo_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/todos/{todo_id}")


def _error_text(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and "error" in payload:
        return str(payload["error"])
    return response.text
