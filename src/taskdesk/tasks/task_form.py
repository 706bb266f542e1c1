# src/taskdesk/tasks/task_form.py

"""
Task form controller (create or edit).

Mode is fixed by activate(): an id means edit, no id means create.

States:
    IDLE -> LOADING (edit only, fetch in flight) -> EDITABLE
    EDITABLE -> SUBMITTING -> SUCCEEDED (form cleared)
                           -> EDITABLE with `error` set (form kept)

SUBMITTING doubles as a lock: a second submit while one is in flight is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum

import httpx

from ..api.errors import ApiError
from ..core.forms import FieldValue, collect_fields, missing_required
from ..core.ports import Notifier, TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)

TASK_FIELDS = ("titulo", "descripcion")


class FormMode(StrEnum):
    CREATE = "create"
    EDIT = "edit"


class FormState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    EDITABLE = "editable"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"


def _describe_update_error(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return f"The task could not be updated (HTTP {response.status_code} {response.reason_phrase})."
    if isinstance(exc, httpx.TransportError):
        return "The task could not be updated: the server is unreachable."
    return "The task could not be updated. Please try again."


class TaskFormController:
    def __init__(self, repository: TaskRepo, notifier: Notifier) -> None:
        self._repository = repository
        self._notifier = notifier

        self.mode: FormMode | None = None
        self.task_id: str | None = None
        self.state = FormState.IDLE
        self.values: dict[str, str] = {name: "" for name in TASK_FIELDS}
        self.field_errors: dict[str, str] = {}
        self.error: str | None = None
        self._disposed = False

    @property
    def is_edit_mode(self) -> bool:
        return self.mode == FormMode.EDIT

    @property
    def titulo(self) -> str:
        return self.values["titulo"]

    @property
    def descripcion(self) -> str:
        return self.values["descripcion"]

    def dispose(self) -> None:
        self._disposed = True

    # ---- lifecycle ----

    async def activate(self, task_id: str | None = None) -> None:
        if self.mode is not None:
            raise RuntimeError("TaskFormController is already activated")

        if not task_id:
            self.mode = FormMode.CREATE
            self.state = FormState.EDITABLE
            return

        self.mode = FormMode.EDIT
        self.task_id = task_id
        self.state = FormState.LOADING
        await self._load_task(task_id)

    async def _load_task(self, task_id: str) -> None:
        logger.info("Fetching task id=%s", task_id)
        try:
            task = await self._repository.get_task_by_id(task_id)
        except ApiError as e:
            # The user can still submit: the id captured at activation is enough.
            logger.warning("Error loading task id=%s: %s", task_id, e)
            task = None

        if self._disposed:
            return

        if task is not None:
            self.values = {"titulo": task.titulo, "descripcion": task.descripcion}
        self.state = FormState.EDITABLE

    # ---- input ----

    def set_field(self, name: str, value: str) -> None:
        self.apply_fields([FieldValue(name, value)])

    def apply_fields(self, fields: Iterable[FieldValue]) -> None:
        """Patch the form with validated field values (unlisted fields keep their value)."""
        items = list(fields)
        collected = collect_fields(items, TASK_FIELDS)
        for item in items:
            self.values[item.name] = collected[item.name]
            self.field_errors.pop(item.name, None)
        if self.state == FormState.SUCCEEDED:
            self.state = FormState.EDITABLE

    def validate(self) -> bool:
        self.field_errors = {name: "Required" for name in missing_required(self.values, TASK_FIELDS)}
        return not self.field_errors

    def reset(self) -> None:
        self.values = {name: "" for name in TASK_FIELDS}
        self.field_errors = {}

    # ---- submit ----

    async def submit(self) -> bool:
        if self.state not in (FormState.EDITABLE, FormState.SUCCEEDED):
            logger.debug("Submit ignored in state=%s", self.state)
            return False

        if not self.validate():
            logger.debug("Submit rejected, missing fields: %s", ", ".join(self.field_errors))
            self.state = FormState.EDITABLE
            return False

        self.state = FormState.SUBMITTING
        self.error = None

        if self.mode == FormMode.EDIT:
            return await self._submit_update()
        return await self._submit_create()

    async def _submit_create(self) -> bool:
        task = Task(titulo=self.titulo, descripcion=self.descripcion)
        try:
            created = await self._repository.create_task(task)
        except ApiError as e:
            logger.warning("Error creating task: %s", e)
            self._fail("The task could not be created. Please try again.")
            return False

        if self._disposed:
            return True

        logger.info("Task created id=%s", created.id)
        self._succeed("The task was created successfully")
        return True

    async def _submit_update(self) -> bool:
        task = Task(id=self.task_id, titulo=self.titulo, descripcion=self.descripcion)
        logger.info("Attempting to update task id=%s", self.task_id)
        try:
            await self._repository.update_task(task)
        except (httpx.HTTPError, ApiError) as e:
            if isinstance(e, httpx.HTTPStatusError):
                logger.warning(
                    "Error updating task id=%s: status=%s body=%s",
                    self.task_id,
                    e.response.status_code,
                    e.response.text[:200],
                )
            else:
                logger.warning("Error updating task id=%s: %s", self.task_id, e)
            self._fail(_describe_update_error(e))
            return False

        if self._disposed:
            return True

        self._succeed("The task was updated successfully")
        return True

    def _succeed(self, description: str) -> None:
        self.reset()
        self.state = FormState.SUCCEEDED
        self._notifier.notify("success", "Well done!", description)

    def _fail(self, message: str) -> None:
        if self._disposed:
            return
        self.error = message
        self.state = FormState.EDITABLE
        self._notifier.notify("error", "Error", message)
