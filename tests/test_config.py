# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskdesk.config import Settings

_VARS = (
    "TASKDESK_API_BASE_URL",
    "TASKDESK_AUTH_URL",
    "TASKDESK_TASKS_URL",
    "TASKDESK_HTTP_TIMEOUT_SECONDS",
    "TASKDESK_DATA_DIR",
    "TASKDESK_SESSION_DIR",
    "TASKDESK_SESSION_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_point_at_local_api() -> None:
    s = Settings.from_env()

    assert s.auth_url == "http://localhost:3000/auth"
    assert s.tasks_url == "http://localhost:3000/tasks"
    assert s.session_key == "user"
    assert s.session_dir == s.data_dir / "session"


def test_endpoints_derive_from_base_url_unless_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKDESK_API_BASE_URL", "https://api.example.com/v1/")
    monkeypatch.setenv("TASKDESK_TASKS_URL", "https://tasks.example.com/items/")

    s = Settings.from_env()

    assert s.auth_url == "https://api.example.com/v1/auth"
    assert s.tasks_url == "https://tasks.example.com/items"


def test_bad_numbers_fall_back_and_paths_expand(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKDESK_HTTP_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("TASKDESK_DATA_DIR", str(tmp_path / "data"))

    s = Settings.from_env()

    assert s.http_timeout_seconds == 10.0
    assert s.data_dir == tmp_path / "data"
    assert s.session_dir == tmp_path / "data" / "session"
