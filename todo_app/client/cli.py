"""Command-line front end for the todo list."""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
import sys
from typing import Iterable, Optional, TextIO

from ..logging_utils import configure_logging
from ..settings import get_client_settings
from .api_client import TodoApiClient
from .app import TodoClientApp

SHELL_HELP = """Commands:
  list            reload the list
  add TEXT        add a todo
  toggle ID       flip the completion checkbox
  delete ID       delete a todo
  help            show this message
  quit            leave the shell"""


def build_parser() -> argparse.ArgumentParser:
    settings = get_client_settings()
    parser = argparse.ArgumentParser(description="Manage todos through the todo API.")
    parser.add_argument("--url", default=settings.api_url, help="Base URL of the proxy or API")
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.timeout_seconds,
        help="Request timeout in seconds",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("list", help="Show all todos")
    add_parser = subparsers.add_parser("add", help="Add a todo")
    add_parser.add_argument("text", nargs="+", help="Todo text")
    toggle_parser = subparsers.add_parser("toggle", help="Toggle completion of a todo")
    toggle_parser.add_argument("todo_id", type=int)
    delete_parser = subparsers.add_parser("delete", help="Delete a todo")
    delete_parser.add_argument("todo_id", type=int)
    subparsers.add_parser("shell", help="Interactive session")
    return parser


async def run_command(app: TodoClientApp, command: str, args: list[str]) -> bool:
    """Apply one command to the app. Returns False when the command is unknown."""
    if command == "list":
        await app.fetch_todos()
    elif command == "add":
        app.set_new_todo_text(" ".join(args))
        await app.add_todo()
    elif command in ("toggle", "delete"):
        if len(args) != 1 or not args[0].isascii():
            return False
        try:
            todo_id = int(args[0])
        except ValueError:
            return False
        if command == "toggle":
            await app.toggle(todo_id)
        else:
            await app.delete_todo(todo_id)
    else:
        return False
    return True


async def run_shell(app: TodoClientApp, lines: Iterable[str], out: TextIO) -> None:
    await app.fetch_todos()
    print(app.render(), file=out)
    for raw_line in lines:
        try:
            parts = shlex.split(raw_line)
        except ValueError:
            print("Could not parse input.", file=out)
            continue
        if not parts:
            continue
        command, args = parts[0].lower(), parts[1:]
        if command in ("quit", "exit"):
            break
        if command == "help":
            print(SHELL_HELP, file=out)
            continue
        if not await run_command(app, command, args):
            print(f"Unknown command: {raw_line.strip()}", file=out)
            print(SHELL_HELP, file=out)
            continue
        print(app.render(), file=out)


async def _main(args: argparse.Namespace, out: TextIO) -> int:
    async with TodoApiClient(args.url, timeout_seconds=args.timeout) as api:
        app = TodoClientApp(api)
        command = args.command or "list"
        if command == "shell":
            await run_shell(app, sys.stdin, out)
            return 0
        # toggle needs the current list to know the completion state
        await app.fetch_todos()
        if command == "add":
            await run_command(app, "add", args.text)
        elif command == "delete" or (command == "toggle" and not app.error):
            await run_command(app, command, [str(args.todo_id)])
        print(app.render(), file=out)
        return 1 if app.error else 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.WARNING)
    return asyncio.run(_main(args, sys.stdout))


if __name__ == "__main__":
    raise SystemExit(main())
