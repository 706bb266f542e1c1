# src/taskdesk/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.ports import NotificationType
from ..core.state import AppState
from ..tasks.task_list import ModalChoice

logger = logging.getLogger(__name__)

_YES = {"y", "yes", "s", "si", "sí", "1"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


async def _ainput(prompt: str) -> str:
    # input() blocks, keep it off the event loop.
    return await asyncio.to_thread(input, prompt)


class ConsoleNotifier:
    """Notifier port on top of stdin/stdout (toasts become lines, the modal becomes a y/N prompt)."""

    def notify(self, type: NotificationType, title: str, description: str) -> None:
        _print_ts(f"[{type.upper()}] {title}: {description}")

    async def confirm(self, title: str, subtitle: str) -> str | None:
        try:
            answer = await _ainput(f"[{_ts_local()}] {title}: {subtitle} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            print()
            return ModalChoice.CANCEL
        return ModalChoice.ACCEPT if answer.strip().lower() in _YES else ModalChoice.CANCEL


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            user = state.session.get_username() or "guest"
            user_input = (await _ainput(f"{user}> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list available commands."

        if response:
            print(response, file=sys.stdout, flush=True)

    logger.info("Console connector finished.")
