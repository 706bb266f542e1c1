# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (HTTP client, session store,
  task repository, notifier),
- hooks the auth state so a logout drops the current task list view.
"""

from __future__ import annotations

import logging

import httpx

from ..api.http import ApiHttpClient
from ..auth.session_storage import FileSessionStorage
from ..auth.session_store import SessionStore
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier
from ..core.ports import Notifier, SessionStorage
from ..core.state import AppState
from ..tasks.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.session_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    storage: SessionStorage | None = None,
    notifier: Notifier | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the storage/notifier/transport seams) injectable makes
    the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = FileSessionStorage(settings.session_dir)

    http = ApiHttpClient.from_settings(settings, transport=transport)
    session = SessionStore(
        http,
        storage,
        auth_url=settings.auth_url,
        storage_key=settings.session_key,
    )
    repository = TaskRepository(http, session, tasks_url=settings.tasks_url)

    state = AppState(
        settings=settings,
        http=http,
        session=session,
        repository=repository,
        notifier=notifier if notifier is not None else ConsoleNotifier(),
    )

    def _on_auth_change(authenticated: bool) -> None:
        if not authenticated:
            state.drop_task_list()

    state.subscriptions.append(session.is_authenticated.subscribe(_on_auth_change))
    logger.debug(
        "State ready auth_url=%s tasks_url=%s authenticated=%s",
        settings.auth_url,
        settings.tasks_url,
        session.is_authenticated.value,
    )
    return state


async def shutdown_state(state: AppState) -> None:
    """Best-effort teardown: dispose subscriptions and views, close the HTTP client."""
    for sub in state.subscriptions:
        sub.dispose()
    state.subscriptions.clear()
    state.drop_task_list()
    try:
        await state.http.aclose()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)
