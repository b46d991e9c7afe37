# src/todo_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")
CONFIRM_ANSWERS = ("y", "yes")


def _confirm_exit(read_line: Callable[[str], str]) -> bool:
    try:
        answer = read_line("Are you sure you want to exit? (y/n): ")
    except (EOFError, KeyboardInterrupt):
        return True
    return answer.strip().lower() in CONFIRM_ANSWERS


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Interactive REPL: one slash command per line until /exit, EOF or Ctrl+C.

    I/O is injectable so the loop can be driven by tests.
    """
    logger.info("Console started (tasks=%s).", state.task_store.count_tasks())
    app_name = str(getattr(state.settings, "app_name", "todo"))
    write(f"[{app_name}] Type /help for commands. Use /exit to quit.")

    while True:
        try:
            user_input = read_line(f"{app_name}> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            if _confirm_exit(read_line):
                write("Goodbye!")
                break
            continue

        try:
            reply = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list available commands."
        write(reply)

    logger.info("Console finished.")
