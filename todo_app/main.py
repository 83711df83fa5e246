"""Main FastAPI application for the todo API."""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import db
from .api.routes import router as api_router
from .logging_utils import bind_request, configure_logging, unbind_request
from .repositories.todo_repository import TodoStoreError
from .schema import initialize_schema
from .settings import get_api_settings, get_database_settings

configure_logging()
logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the connection pool on startup and close it on shutdown."""
    database_settings = get_database_settings()
    logger.info("Starting Todo API...")
    if get_api_settings().init_schema_on_startup:
        await initialize_schema(database_settings)
    try:
        app.state.pool = await db.create_pool(database_settings)
    except Exception:
        logger.exception("Failed to initialize database connection")
        raise

    yield

    logger.info("Shutting down Todo API...")
    await db.close_pool(app.state.pool)
    app.state.pool = None


app = FastAPI(
    title="Todo API",
    description="A simple todo management API with CRUD operations",
    version="1.0.0",
    lifespan=lifespan,
)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    message = str(first.get("msg", "Invalid input")).removeprefix("Value error, ")
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "path")]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _validation_message(exc)},
    )


@app.exception_handler(TodoStoreError)
async def store_error_handler(request: Request, exc: TodoStoreError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR},
    )


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request_token = bind_request(request_id, request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception as exc:
        # error responses carry the request id too
        response = await unexpected_error_handler(request, exc)
    finally:
        unbind_request(request_token)
    response.headers["X-Request-ID"] = request_id
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_api_settings().allowed_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with basic API info."""
    return {
        "message": "Todo API",
        "endpoints": "/api/todos",
    }


@app.get("/health")
def read_health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")
