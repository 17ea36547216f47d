from __future__ import annotations

from datetime import date

from taskboard.domain.enums import TaskPriority, TaskStatus

from .task_service import TaskService

DEMO_TASKS = [
    {
        "title": "Setup project structure",
        "description": "Initialize the project with required dependencies",
        "status": TaskStatus.DONE,
        "priority": TaskPriority.HIGH,
        "assignee": "John Doe",
    },
    {
        "title": "Implement task CRUD operations",
        "description": "Create, read, update, and delete tasks functionality",
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.HIGH,
        "due_date": date(2024, 1, 15),
        "assignee": "Jane Smith",
    },
    {
        "title": "Add drag and drop functionality",
        "description": "Implement drag and drop for task status changes",
        "status": TaskStatus.TO_DO,
        "priority": TaskPriority.MEDIUM,
        "due_date": date(2024, 1, 20),
    },
]


def seed_demo_tasks(service: TaskService) -> None:
    for data in DEMO_TASKS:
        service.add_task(data)
