# src/taskdesk/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable

from ..auth.login import LoginController
from ..core.forms import FieldValue
from ..core.state import AppState
from ..tasks.task_form import TaskFormController
from ..tasks.task_list import TaskListController
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str] | str]

logger = logging.getLogger(__name__)

LOGIN_HINT = "You are not logged in. Use /login <username> <password>."


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._auth_required: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        requires_auth: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if requires_auth:
            self._auth_required.update([key, *(a.lower() for a in aliases)])

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        # Task views are only reachable with a session, like a guarded route.
        if name in self._auth_required and not state.session.is_authenticated.value:
            return LOGIN_HINT

        result = handler(state, args, emit)
        if inspect.isawaitable(result):
            result = await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _split_title_description(args: list[str]) -> tuple[str, str]:
    """'/new Buy milk | two liters' -> ('Buy milk', 'two liters')."""
    text = " ".join(args)
    titulo, sep, descripcion = text.partition("|")
    if not sep:
        return titulo.strip(), ""
    return titulo.strip(), descripcion.strip()


def _format_tasks(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks yet. Use /new <title> | <description> to create one."
    lines = [f"Tasks ({len(tasks)}):"]
    for i, task in enumerate(tasks, start=1):
        lines.append(f"{i}. [{task.id}] {task.titulo} - {task.descripcion}")
    return "\n".join(lines)


async def _refresh_list(state: AppState) -> None:
    if state.task_list is not None:
        await state.task_list.load_tasks()


def _progress(emit: CommandEmitter | None, text: str) -> None:
    # Progress lines are best-effort; a broken sink must not fail the command.
    if emit:
        with contextlib.suppress(Exception):
            emit(text)


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    settings = state.settings
    user = state.session.get_username()
    auth = f"logged in as {user}" if state.session.is_authenticated.value else "logged out"
    return (
        "Status:\n"
        f"  Session: {auth}\n"
        f"  Auth API: {getattr(settings, 'auth_url', '?')}\n"
        f"  Tasks API: {getattr(settings, 'tasks_url', '?')}"
    )


async def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 2:
        return "Usage: /login <username> <password>"

    _progress(emit, f"Logging in as {args[0]}...")
    controller = LoginController(state.session, state.notifier)
    ok = await controller.login([FieldValue("username", args[0]), FieldValue("password", args[1])])
    if not ok:
        if controller.missing:
            return f"Missing: {', '.join(controller.missing)}"
        return ""
    return f"Welcome, {state.session.get_username() or args[0]}. Use /list to see your tasks."


async def cmd_register(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 2:
        return "Usage: /register <username> <password>"

    _progress(emit, f"Registering {args[0]}...")
    controller = LoginController(state.session, state.notifier)
    await controller.register([FieldValue("username", args[0]), FieldValue("password", args[1])])
    if controller.missing:
        return f"Missing: {', '.join(controller.missing)}"
    return ""


def cmd_logout(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.session.logout()
    return "Logged out."


async def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.drop_task_list()
    _progress(emit, "Loading tasks...")
    controller = TaskListController(state.repository, state.notifier)
    await controller.activate()
    state.task_list = controller
    return _format_tasks(controller.tasks)


async def cmd_new(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    titulo, descripcion = _split_title_description(args)

    form = TaskFormController(state.repository, state.notifier)
    await form.activate()
    form.apply_fields([FieldValue("titulo", titulo), FieldValue("descripcion", descripcion)])
    if not form.validate():
        return f"Usage: /new <title> | <description> (missing: {', '.join(form.field_errors)})"

    _progress(emit, "Creating task...")
    if await form.submit():
        await _refresh_list(state)
    return ""


async def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit <id>                          -> show the task
    /edit <id> <title> | <description>  -> update it (an empty part keeps the current value)
    """
    if not args:
        return "Usage: /edit <id> [<title> | <description>]"

    task_id, rest = args[0], args[1:]

    _progress(emit, f"Loading task {task_id}...")
    form = TaskFormController(state.repository, state.notifier)
    await form.activate(task_id)

    if not rest:
        if not form.titulo and not form.descripcion:
            return f"Task {task_id} could not be loaded."
        return f"[{task_id}] {form.titulo} - {form.descripcion}"

    titulo, descripcion = _split_title_description(rest)
    updates = [FieldValue(name, value) for name, value in (("titulo", titulo), ("descripcion", descripcion)) if value]
    form.apply_fields(updates)

    if not form.validate():
        return f"Missing: {', '.join(form.field_errors)}"

    _progress(emit, f"Saving task {task_id}...")
    if await form.submit():
        await _refresh_list(state)
    return ""


async def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"

    if state.task_list is None:
        _progress(emit, "Loading tasks...")
        state.task_list = TaskListController(state.repository, state.notifier)
        await state.task_list.activate()

    controller = state.task_list
    before = len(controller.tasks)
    await controller.confirm_delete_task(args[0])

    if len(controller.tasks) < before:
        return f"Task {args[0]} deleted."
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session and API endpoints.")
registry.register("register", cmd_register, help_text="Create an account: /register <username> <password>.")
registry.register("login", cmd_login, help_text="Log in: /login <username> <password>.")
registry.register("logout", cmd_logout, help_text="Log out and forget the stored session.")
registry.register("list", cmd_list, help_text="List your tasks.", aliases=["ls"], requires_auth=True)
registry.register(
    "new", cmd_new, help_text="Create a task: /new <title> | <description>.", requires_auth=True
)
registry.register(
    "edit", cmd_edit, help_text="Show or update a task: /edit <id> [<title> | <description>].", requires_auth=True
)
registry.register(
    "delete", cmd_delete, help_text="Delete a task (asks for confirmation): /delete <id>.", aliases=["rm"], requires_auth=True
)
