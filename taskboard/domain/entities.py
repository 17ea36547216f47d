from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from .enums import TaskPriority, TaskStatus

OPTIONAL_FIELDS = ("description", "assignee", "due_date")
REQUIRED_FIELDS = ("title", "status", "priority")
READONLY_FIELDS = ("id", "created_at", "updated_at")


@dataclass(frozen=True)
class TaskEntity:
    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    assignee: Optional[str] = None
    due_date: Optional[date] = None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the task; unset optional fields are left out."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        for name in OPTIONAL_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data
