"""Logging utilities that tag each record with the request it belongs to."""

from __future__ import annotations

import contextvars
import logging
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    method: str = "-"
    path: str = "-"


request_context_var: contextvars.ContextVar[Optional[RequestContext]] = contextvars.ContextVar(
    "request_context", default=None
)


class RequestContextFilter(logging.Filter):
    """Copies the bound request onto every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = request_context_var.get()
        if context is None:
            record.request_id = "-"
            record.route = "-"
        else:
            record.request_id = context.request_id
            record.route = f"{context.method} {context.path}"
        return True


def configure_logging(level: int = logging.INFO) -> None:
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format=(
                "%(asctime)s level=%(levelname)s logger=%(name)s "
                "request_id=%(request_id)s route=\"%(route)s\" message=\"%(message)s\""
            ),
        )
    for handler in root_logger.handlers:
        if not any(isinstance(existing, RequestContextFilter) for existing in handler.filters):
            handler.addFilter(RequestContextFilter())


def bind_request(request_id: str, method: str = "-", path: str = "-") -> contextvars.Token:
    return request_context_var.set(RequestContext(request_id, method, path))


def unbind_request(token: contextvars.Token) -> None:
    request_context_var.reset(token)


def get_request_id() -> Optional[str]:
    context = request_context_var.get()
    return context.request_id if context else None
