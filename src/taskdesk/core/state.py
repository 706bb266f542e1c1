# src/taskdesk/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..api.http import ApiHttpClient
from ..auth.session_store import SessionStore
from .observable import Subscription
from .ports import Notifier, TaskRepo

if TYPE_CHECKING:
    from ..tasks.task_list import TaskListController


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    http: ApiHttpClient
    session: SessionStore
    repository: TaskRepo
    notifier: Notifier

    # Current list view (created by /list, dropped on logout).
    task_list: TaskListController | None = None
    subscriptions: list[Subscription] = field(default_factory=list)

    def drop_task_list(self) -> None:
        if self.task_list is not None:
            self.task_list.dispose()
            self.task_list = None
