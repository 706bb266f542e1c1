# src/taskdesk/tasks/task_repository.py

"""
Task repository: stateless CRUD client for the task API.

Every call reads the current session for the bearer token (an empty token
is still sent; rejecting it is the server's job). Errors are raised as
typed ApiErrors, except update_task which lets the raw httpx error through
so callers can look at the status and body themselves.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any

from ..api.errors import AuthError, ServerError
from ..api.http import ApiHttpClient
from ..auth.session_store import SessionStore
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskRepository:
    def __init__(self, http: ApiHttpClient, session: SessionStore, *, tasks_url: str) -> None:
        self._http = http
        self._session = session
        self._tasks_url = tasks_url.rstrip("/")

    def _task_url(self, task_id: str) -> str:
        return f"{self._tasks_url}/{task_id}"

    def _require_username(self) -> str:
        username = self._session.get_username()
        if username is None:
            raise AuthError("No active session: log in first")
        return username

    async def get_tasks(self) -> list[Task]:
        username = self._require_username()
        data = await self._http.request(
            "GET",
            self._tasks_url,
            token=self._session.get_token(),
            params={"username": username},
        )
        if data is None:
            return []
        if not isinstance(data, list):
            raise ServerError(f"Malformed task list: expected array, got {type(data).__name__}", detail=data)
        tasks = [Task.from_api(item) for item in data]
        logger.debug("Fetched %d tasks for user=%s", len(tasks), username)
        return tasks

    async def get_task_by_id(self, task_id: str) -> Task:
        data = await self._http.request(
            "GET",
            self._task_url(task_id),
            token=self._session.get_token(),
        )
        return Task.from_api(data)

    async def create_task(self, task: Task) -> Task:
        """
        Stamp a fresh id and the session's username, then POST the task.

        Returns the stamped local task; the server reply is not merged back.
        """
        stamped = replace(task, id=str(uuid.uuid4()), username=self._require_username())
        await self._http.request(
            "POST",
            self._tasks_url,
            token=self._session.get_token(),
            json_data=stamped.to_create_payload(),
        )
        logger.info("Created task id=%s", stamped.id)
        return stamped

    async def update_task(self, task: Task) -> Task | None:
        if not task.id:
            raise ValueError("update_task needs a task with an id")

        payload = task.to_update_payload()
        logger.debug("PUT %s payload=%s", self._task_url(task.id), payload)
        data = await self._http.request(
            "PUT",
            self._task_url(task.id),
            token=self._session.get_token(),
            json_data=payload,
            map_errors=False,
        )
        logger.info("Updated task id=%s", task.id)
        if isinstance(data, dict) and "titulo" in data and "descripcion" in data:
            return Task.from_api(data)
        return None

    async def delete_task(self, task_id: str) -> Any:
        result = await self._http.request(
            "DELETE",
            self._task_url(task_id),
            token=self._session.get_token(),
        )
        logger.info("Deleted task id=%s", task_id)
        return result
