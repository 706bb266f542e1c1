# src/taskdesk/auth/session_store.py

"""
Session store: the single owner of authentication state.

- login() persists the whole server response under one storage key
- logout() removes it
- is_authenticated mirrors "a session record is persisted"
- get_token() / get_current_user() are synchronous reads of that record

There is no module-level instance: bootstrap builds one and passes it down.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..api.errors import ServerError
from ..api.http import ApiHttpClient
from ..core.observable import ObservableValue
from ..core.ports import SessionStorage

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(
        self,
        http: ApiHttpClient,
        storage: SessionStorage,
        *,
        auth_url: str,
        storage_key: str = "user",
    ) -> None:
        self._http = http
        self._storage = storage
        self._auth_url = auth_url.rstrip("/")
        self._key = storage_key
        # Computed once: whatever was left on disk by a previous run counts.
        self.is_authenticated: ObservableValue[bool] = ObservableValue(self._read_record() is not None)

    def _read_record(self) -> str | None:
        try:
            return self._storage.get(self._key)
        except (OSError, ValueError) as e:
            # Undecodable bytes or an unreadable file count as "no session".
            logger.warning("Stored session could not be read (%s); treating as logged out", e.__class__.__name__)
            return None

    async def register(self, username: str, password: str) -> Any:
        """Create an account. The session is not touched."""
        result = await self._http.request(
            "POST",
            f"{self._auth_url}/register",
            json_data={"username": username, "password": password},
        )
        logger.info("Registered user=%s", username)
        return result

    async def login(self, username: str, password: str) -> dict[str, Any]:
        """
        Authenticate and persist the server response verbatim.

        Any failure propagates unchanged (typed ApiError) and leaves the
        previous state as it was.
        """
        response = await self._http.request(
            "POST",
            f"{self._auth_url}/login",
            json_data={"username": username, "password": password},
        )
        if not isinstance(response, dict):
            raise ServerError("Login response is not a JSON object")

        self._storage.set(self._key, json.dumps(response, ensure_ascii=False))
        self.is_authenticated.set(True)
        logger.info("Logged in user=%s", response.get("username", username))
        return response

    def logout(self) -> None:
        self._storage.remove(self._key)
        self.is_authenticated.set(False)
        logger.info("Logged out")

    def get_current_user(self) -> dict[str, Any] | None:
        raw = self._read_record()
        if raw is None:
            return None
        try:
            user = json.loads(raw)
        except ValueError:
            logger.warning("Stored session is not valid JSON; treating as logged out")
            return None
        if not isinstance(user, dict):
            logger.warning("Stored session is not a JSON object; treating as logged out")
            return None
        return user

    def get_token(self) -> str:
        user = self.get_current_user()
        if user is None:
            return ""
        token = user.get("token")
        return token if isinstance(token, str) else ""

    def get_username(self) -> str | None:
        user = self.get_current_user()
        if user is None:
            return None
        username = user.get("username")
        return username if isinstance(username, str) and username else None
