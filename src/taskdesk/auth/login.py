# src/taskdesk/auth/login.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..api.errors import ApiError
from ..core.forms import FieldValue, collect_fields, missing_required
from ..core.ports import Notifier
from .session_store import SessionStore

logger = logging.getLogger(__name__)

CREDENTIAL_FIELDS = ("username", "password")


class LoginController:
    """Login/registration form: validates the submitted fields, then calls the SessionStore."""

    def __init__(self, session: SessionStore, notifier: Notifier) -> None:
        self._session = session
        self._notifier = notifier
        self.missing: list[str] = []

    def _credentials(self, fields: Iterable[FieldValue]) -> dict[str, str] | None:
        values = collect_fields(fields, CREDENTIAL_FIELDS)
        self.missing = missing_required(values, CREDENTIAL_FIELDS)
        if self.missing:
            logger.debug("Credentials incomplete: missing %s", ", ".join(self.missing))
            return None
        return values

    async def login(self, fields: Iterable[FieldValue]) -> bool:
        values = self._credentials(fields)
        if values is None:
            return False

        try:
            await self._session.login(values["username"], values["password"])
        except ApiError as e:
            logger.warning("Login failed for user=%s: %s", values["username"], e)
            self._notifier.notify("error", "Please check your credentials", "Incorrect username or password")
            return False
        return True

    async def register(self, fields: Iterable[FieldValue]) -> bool:
        values = self._credentials(fields)
        if values is None:
            return False

        try:
            await self._session.register(values["username"], values["password"])
        except ApiError as e:
            logger.warning("Registration failed for user=%s: %s", values["username"], e)
            self._notifier.notify("error", "Registration failed", "The account could not be created")
            return False

        self._notifier.notify("success", "Account created", "You can now log in")
        return True
