#!/usr/bin/env python3
"""
Entry point for the todo application.
Supports several launch modes.
"""

import asyncio
import logging
import sys

from .logging_utils import configure_logging
from .settings import get_api_settings, get_proxy_settings

logger = logging.getLogger(__name__)


def log_startup(component: str, port: int, workers: int = 1) -> None:
    """Log a single startup line for process managers."""
    logger.info(
        "Starting %s on 0.0.0.0:%s (WORKERS=%s)",
        component,
        port,
        workers,
    )


def run_api() -> None:
    """Run the API service."""
    import uvicorn

    settings = get_api_settings()
    log_startup("todo API", settings.port, settings.workers)
    uvicorn.run(
        "todo_app.main:app",
        host="0.0.0.0",
        port=settings.port,
        workers=settings.workers,
        log_level="info",
    )


def run_proxy() -> None:
    """Run the reverse proxy and static server."""
    import uvicorn

    settings = get_proxy_settings()
    log_startup("todo proxy", settings.port)
    uvicorn.run(
        "todo_app.proxy:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="info",
    )


async def run_all() -> None:
    """Run API and proxy together in one event loop."""
    import uvicorn

    api_settings = get_api_settings()
    proxy_settings = get_proxy_settings()
    log_startup("todo API", api_settings.port)
    log_startup("todo proxy", proxy_settings.port)
    servers = [
        uvicorn.Server(
            uvicorn.Config(
                app="todo_app.main:app",
                host="0.0.0.0",
                port=api_settings.port,
                log_level="info",
                access_log=True,
            )
        ),
        uvicorn.Server(
            uvicorn.Config(
                app="todo_app.proxy:app",
                host="0.0.0.0",
                port=proxy_settings.port,
                log_level="info",
                access_log=True,
            )
        ),
    ]
    await asyncio.gather(*(server.serve() for server in servers))


def run_setup_db() -> int:
    """Create the database and table."""
    from .schema import main as setup_main

    return setup_main([])


def show_help() -> None:
    print("""
Todo application - launch utility

Usage:
  todo-app [command]

Commands:
  api        - Run the API service (default)
  proxy      - Run the reverse proxy / static server
  all        - Run API and proxy together
  setup-db   - Create the database and todos table
  help       - Show this help message
    """.strip())


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    mode = argv[0].lower() if argv else "api"
    configure_logging()

    try:
        if mode == "api":
            run_api()
        elif mode == "proxy":
            run_proxy()
        elif mode == "all":
            asyncio.run(run_all())
        elif mode == "setup-db":
            return run_setup_db()
        elif mode in ["help", "-h", "--help"]:
            show_help()
        else:
            print(f"Unknown mode: {mode}")
            show_help()
            return 1
    except KeyboardInterrupt:
        logger.info("Shutdown requested...")
    except Exception as e:
        logger.error("Error: %s", e, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
