# src/taskdesk/tasks/task_list.py

"""
Task list controller.

Holds the user's tasks in memory (server order) and implements the staged
delete:
1. confirm_delete_task(id) remembers the candidate and opens the confirmation
2. handle_modal_button_click(choice) deletes it only when the user accepted
3. the task leaves the local list only after the server confirmed the delete
"""

from __future__ import annotations

import logging
from enum import StrEnum

from ..api.errors import ApiError
from ..core.ports import Notifier, TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)


class ModalChoice(StrEnum):
    """Button ids of the delete confirmation."""

    ACCEPT = "1"
    CANCEL = "0"


DELETE_CONFIRM_TITLE = "Confirmation"
DELETE_CONFIRM_SUBTITLE = "Are you sure you want to delete this task?"


class TaskListController:
    def __init__(self, repository: TaskRepo, notifier: Notifier) -> None:
        self._repository = repository
        self._notifier = notifier
        self.tasks: list[Task] = []
        self.pending_delete_id: str | None = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def activate(self) -> None:
        await self.load_tasks()

    def dispose(self) -> None:
        """Drop any result that resolves after teardown."""
        self._disposed = True
        self.pending_delete_id = None

    async def load_tasks(self) -> bool:
        try:
            tasks = await self._repository.get_tasks()
        except ApiError as e:
            logger.warning("Error loading tasks: %s", e)
            return False

        if self._disposed:
            logger.debug("Task list disposed; dropping %d loaded tasks", len(tasks))
            return False

        self.tasks = list(tasks)
        logger.info("Loaded %d tasks", len(self.tasks))
        return True

    async def confirm_delete_task(self, task_id: str) -> None:
        self.pending_delete_id = task_id
        choice = await self._notifier.confirm(DELETE_CONFIRM_TITLE, DELETE_CONFIRM_SUBTITLE)
        if choice is not None:
            await self.handle_modal_button_click(choice)

    async def handle_modal_button_click(self, choice: str) -> None:
        # The pending id is cleared on every answer, confirmed or not.
        # NOTE: two overlapping prompts share this slot, so the second answer may
        # find it already cleared by the first.
        try:
            if choice == ModalChoice.ACCEPT and self.pending_delete_id:
                await self.delete_task(self.pending_delete_id)
        finally:
            self.pending_delete_id = None

    async def delete_task(self, task_id: str) -> bool:
        logger.info("Deleting task id=%s", task_id)
        try:
            await self._repository.delete_task(task_id)
        except ApiError as e:
            logger.warning("Error deleting task id=%s: %s", task_id, e)
            if not self._disposed:
                self._notifier.notify("error", "Error", "The task could not be deleted. Please try again.")
            return False

        if self._disposed:
            return True

        self.tasks = [task for task in self.tasks if task.id != task_id]
        logger.info("Task id=%s deleted", task_id)
        return True
