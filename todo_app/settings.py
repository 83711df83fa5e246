from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple
import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        return float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw_value!r}") from exc


def _env_bool(name: str, default: bool) -> bool:
    raw_value = os.getenv(name)
    if raw_value is None or raw_value.strip() == "":
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DatabaseSettings:
    host: Optional[str]
    port: int
    user: Optional[str]
    password: Optional[str]
    database: Optional[str]
    ssl_required: bool
    admin_database: str = "postgres"
    pool_min_size: int = 1
    pool_max_size: int = 10

    def missing(self) -> List[str]:
        """Return the names of required variables that are not set."""
        required = (
            ("PGHOST", self.host),
            ("PGUSER", self.user),
            ("PGPASSWORD", self.password),
            ("PGDATABASE", self.database),
        )
        return [name for name, value in required if not value]

    def connect_kwargs(self, database: Optional[str] = None) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": database or self.database,
            "ssl": "require" if self.ssl_required else False,
        }


@dataclass(frozen=True)
class ApiSettings:
    port: int
    allowed_origins: Tuple[str, ...]
    init_schema_on_startup: bool
    workers: int


@dataclass(frozen=True)
class ProxySettings:
    port: int
    upstream_url: str
    static_dir: str
    timeout_seconds: float


@dataclass(frozen=True)
class ClientSettings:
    api_url: str
    timeout_seconds: float


@lru_cache
def get_database_settings() -> DatabaseSettings:
    return DatabaseSettings(
        host=os.getenv("PGHOST"),
        port=_env_int("PGPORT", 5432),
        user=os.getenv("PGUSER"),
        password=os.getenv("PGPASSWORD"),
        database=os.getenv("PGDATABASE"),
        ssl_required=os.getenv("PGSSLMODE", "").lower() == "require",
        admin_database=os.getenv("PGADMINDATABASE", "postgres"),
        pool_min_size=_env_int("PG_POOL_MIN_SIZE", 1),
        pool_max_size=_env_int("PG_POOL_MAX_SIZE", 10),
    )


def parse_allowed_origins(raw_value: Optional[str]) -> Tuple[str, ...]:
    if raw_value is None:
        return ("*",)
    origins = tuple(origin.strip() for origin in raw_value.split(",") if origin.strip())
    return origins or ("*",)


def parse_workers(raw_value: Optional[str]) -> int:
    """Parse WEB_CONCURRENCY, falling back to one worker on bad input."""
    try:
        workers = int(raw_value or "1")
    except ValueError:
        logger.warning(
            "Invalid WEB_CONCURRENCY value '%s'; defaulting to 1", raw_value
        )
        workers = 1
    return max(1, workers)


@lru_cache
def get_api_settings() -> ApiSettings:
    return ApiSettings(
        port=_env_int("PORT", 3001),
        allowed_origins=parse_allowed_origins(os.getenv("ALLOWED_ORIGINS")),
        init_schema_on_startup=_env_bool("TODO_INIT_SCHEMA", True),
        workers=parse_workers(os.getenv("WEB_CONCURRENCY")),
    )


@lru_cache
def get_proxy_settings() -> ProxySettings:
    return ProxySettings(
        port=_env_int("PROXY_PORT", 8080),
        upstream_url=os.getenv("API_UPSTREAM_URL", "http://localhost:3001").rstrip("/"),
        static_dir=os.getenv("STATIC_DIR", "static"),
        timeout_seconds=_env_float("PROXY_TIMEOUT_SECONDS", 30.0),
    )


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings(
        api_url=os.getenv("TODO_API_URL", "http://localhost:8080").rstrip("/"),
        timeout_seconds=_env_float("TODO_CLIENT_TIMEOUT_SECONDS", 10.0),
    )
