# src/taskdesk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controllers depend on Protocols instead of concrete implementations.
This keeps the UI surface (console, tests) and the storage swappable.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Literal, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task

NotificationType = Literal["success", "error", "warning", "info"]


class Notifier(Protocol):
    """
    UI-side port replacing toast and modal widgets.

    confirm() returns the id of the pressed button, or None when the surface
    delivers the answer later (through the controller's button handler).
    """

    def notify(self, type: NotificationType, title: str, description: str) -> None: ...

    def confirm(self, title: str, subtitle: str) -> Awaitable[str | None]: ...


class SessionStorage(Protocol):
    """Durable string key/value storage (one key holds the session record)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class TaskRepo(Protocol):
    def get_tasks(self) -> Awaitable[list[Task]]: ...
    def get_task_by_id(self, task_id: str) -> Awaitable[Task]: ...
    def create_task(self, task: Task) -> Awaitable[Task]: ...
    def update_task(self, task: Task) -> Awaitable[Task | None]: ...
    def delete_task(self, task_id: str) -> Awaitable[Any]: ...
