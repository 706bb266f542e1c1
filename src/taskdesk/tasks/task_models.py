# src/taskdesk/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..api.errors import ServerError


@dataclass(slots=True)
class Task:
    titulo: str
    descripcion: str
    id: str | None = None
    username: str | None = None

    @classmethod
    def from_api(cls, raw: Any) -> Task:
        """Parse one task object from the API; unknown keys are ignored."""
        if not isinstance(raw, dict):
            raise ServerError(f"Malformed task payload: expected object, got {type(raw).__name__}")

        titulo = raw.get("titulo")
        descripcion = raw.get("descripcion")
        if not isinstance(titulo, str) or not isinstance(descripcion, str):
            raise ServerError("Malformed task payload: titulo/descripcion missing", detail=raw)

        task_id = raw.get("id")
        username = raw.get("username")
        return cls(
            titulo=titulo,
            descripcion=descripcion,
            id=None if task_id is None else str(task_id),
            username=username if isinstance(username, str) else None,
        )

    def to_create_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "titulo": self.titulo,
            "descripcion": self.descripcion,
            "username": self.username,
        }

    def to_update_payload(self) -> dict[str, Any]:
        # Ownership stays with the server: id goes in the path, username is never resent.
        return {
            "titulo": self.titulo,
            "descripcion": self.descripcion,
        }
