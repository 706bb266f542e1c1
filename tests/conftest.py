# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdesk.api.http import ApiHttpClient
from taskdesk.auth.session_storage import MemorySessionStorage
from taskdesk.auth.session_store import SessionStore
from taskdesk.tasks.task_repository import TaskRepository

from .fakes import FakeApi, FakeNotifier

AUTH_URL = "http://api.test/auth"
TASKS_URL = "http://api.test/tasks"

SESSION_RECORD = {"token": "tok-123", "username": "ana", "role": "user"}


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the API layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdesk-test",
        log_level="DEBUG",
        auth_url=AUTH_URL,
        tasks_url=TASKS_URL,
        http_timeout_seconds=5.0,
        http_connect_timeout_seconds=1.0,
        data_dir=tmp_path / "data",
        session_dir=tmp_path / "data" / "session",
        session_key="user",
    )


@pytest.fixture()
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture()
def logged_in_storage() -> MemorySessionStorage:
    return MemorySessionStorage({"user": json.dumps(SESSION_RECORD)})


@pytest.fixture()
def http(api: FakeApi) -> ApiHttpClient:
    # MockTransport holds no sockets, so the client needs no explicit aclose() here.
    return ApiHttpClient(transport=api.transport)


@pytest.fixture()
def session(http: ApiHttpClient, storage: MemorySessionStorage) -> SessionStore:
    return SessionStore(http, storage, auth_url=AUTH_URL, storage_key="user")


@pytest.fixture()
def logged_in_session(http: ApiHttpClient, logged_in_storage: MemorySessionStorage) -> SessionStore:
    return SessionStore(http, logged_in_storage, auth_url=AUTH_URL, storage_key="user")


@pytest.fixture()
def repository(http: ApiHttpClient, logged_in_session: SessionStore) -> TaskRepository:
    return TaskRepository(http, logged_in_session, tasks_url=TASKS_URL)
