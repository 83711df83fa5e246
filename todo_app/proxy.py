"""Reverse proxy and static file server for the todo client.

``/api/*`` is forwarded to the API service; every other GET serves a file
from the static directory, falling back to ``index.html`` so client-side
routes resolve.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import FileResponse, JSONResponse, Response

from .logging_utils import bind_request, configure_logging, get_request_id, unbind_request
from .settings import ProxySettings, get_proxy_settings

logger = logging.getLogger(__name__)

HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailers",
        "transfer-encoding",
        "upgrade",
        "host",
        "content-length",
        "content-encoding",
    }
)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def filter_headers(headers) -> dict[str, str]:
    return {
        name: value
        for name, value in headers.items()
        if name.lower() not in HOP_BY_HOP_HEADERS
    }


def resolve_static_file(static_root: Path, full_path: str) -> Optional[Path]:
    """Return the file for ``full_path`` or None when it is missing or outside the root."""
    if not full_path:
        return None
    root = static_root.resolve()
    candidate = (root / full_path).resolve()
    if not candidate.is_relative_to(root):
        return None
    if candidate.is_file():
        return candidate
    return None


def create_proxy_app(
    settings: Optional[ProxySettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or get_proxy_settings()
    static_root = Path(settings.static_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting proxy upstream=%s static_dir=%s",
            settings.upstream_url,
            static_root,
        )
        if not (static_root / "index.html").is_file():
            logger.warning("No index.html under %s; only /api/* will be served", static_root)
        app.state.upstream = httpx.AsyncClient(
            base_url=settings.upstream_url,
            timeout=httpx.Timeout(settings.timeout_seconds),
            transport=transport,
        )
        yield
        await app.state.upstream.aclose()
        logger.info("Proxy upstream client closed")

    app = FastAPI(title="Todo proxy", lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_token = bind_request(request_id, request.method, request.url.path)
        try:
            response = await call_next(request)
        finally:
            unbind_request(request_token)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.api_route("/api/{path:path}", methods=PROXY_METHODS)
    async def forward_api(path: str, request: Request) -> Response:
        upstream: httpx.AsyncClient = request.app.state.upstream
        headers = filter_headers(request.headers)
        headers["x-request-id"] = get_request_id() or str(uuid.uuid4())
        try:
            upstream_response = await upstream.request(
                request.method,
                f"/api/{path}",
                params=request.query_params.multi_items(),
                content=await request.body(),
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.error("Upstream request %s /api/%s failed: %s", request.method, path, exc)
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content={"error": "Upstream API unavailable"},
            )
        return Response(
            content=upstream_response.content,
            status_code=upstream_response.status_code,
            headers=filter_headers(upstream_response.headers),
        )

    @app.get("/{full_path:path}")
    async def serve_client(full_path: str) -> Response:
        file_path = resolve_static_file(static_root, full_path)
        if file_path is not None:
            return FileResponse(file_path)
        index_path = static_root / "index.html"
        if index_path.is_file():
            return FileResponse(index_path)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})

    return app


configure_logging()
app = create_proxy_app()
