# src/taskdesk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
- Components receive settings explicitly (bootstrap passes them down).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDESK"

DEFAULT_API_BASE_URL = "http://localhost:3000"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _join_url(base: str, path: str) -> str:
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote API ----
    api_base_url: str
    auth_url: str
    tasks_url: str
    http_timeout_seconds: float
    http_connect_timeout_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    session_dir: Path
    session_key: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskdesk") or "taskdesk"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_base_url = (_first_env(_k("API_BASE_URL"), default=DEFAULT_API_BASE_URL) or "").strip()
        auth_url = (_first_env(_k("AUTH_URL"), default="") or "").strip() or _join_url(api_base_url, "auth")
        tasks_url = (_first_env(_k("TASKS_URL"), default="") or "").strip() or _join_url(api_base_url, "tasks")

        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0)
        http_connect_timeout_seconds = _env_float(_k("HTTP_CONNECT_TIMEOUT_SECONDS"), 5.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdesk"))
        session_dir = _env_path(_k("SESSION_DIR"), data_dir / "session")
        session_key = (_env(_k("SESSION_KEY"), "user") or "user").strip() or "user"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_base_url=api_base_url,
            auth_url=auth_url.rstrip("/"),
            tasks_url=tasks_url.rstrip("/"),
            http_timeout_seconds=http_timeout_seconds,
            http_connect_timeout_seconds=http_connect_timeout_seconds,
            data_dir=data_dir,
            session_dir=session_dir,
            session_key=session_key,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
