from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from taskboard.domain.enums import TaskPriority, TaskStatus
from taskboard.infra.repository import InMemoryTaskRepository
from taskboard.services.seed import seed_demo_tasks
from taskboard.services.task_service import BoardSnapshot, TaskService


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: int = 1) -> None:
        self.now += timedelta(minutes=minutes)


def make_service(clock: FakeClock | None = None) -> TaskService:
    return TaskService(InMemoryTaskRepository(clock=clock or FakeClock()))


def task_data(title: str, status: str = "To Do", priority: str = "Medium", **extra) -> dict:
    return {"title": title, "status": status, "priority": priority, **extra}


def test_add_task_assigns_unique_id_and_equal_timestamps() -> None:
    service = make_service()

    first = service.add_task(task_data("First"))
    second = service.add_task(task_data("Second"))

    assert first.id != second.id
    assert first.created_at == first.updated_at
    assert first.status is TaskStatus.TO_DO
    assert first.priority is TaskPriority.MEDIUM
    assert [t.id for t in service.list_tasks()] == [first.id, second.id]


def test_add_task_ignores_supplied_id_and_timestamps() -> None:
    clock = FakeClock()
    service = make_service(clock)

    task = service.add_task(task_data("Title", id="mine", created_at=datetime(2000, 1, 1)))

    assert task.id != "mine"
    assert task.created_at == clock.now


def test_add_task_requires_status_and_priority() -> None:
    service = make_service()

    with pytest.raises(TypeError):
        service.add_task({"title": "No status"})
    assert service.list_tasks() == []


def test_add_task_regenerates_colliding_ids() -> None:
    ids = iter(["a", "a", "b"])
    service = TaskService(InMemoryTaskRepository(id_factory=lambda: next(ids)))

    first = service.add_task(task_data("One"))
    second = service.add_task(task_data("Two"))

    assert (first.id, second.id) == ("a", "b")


def test_update_task_merges_fields_and_refreshes_updated_at() -> None:
    clock = FakeClock()
    service = make_service(clock)
    task = service.add_task(task_data("Write docs", description="Draft", assignee="Ann"))

    clock.advance()
    updated = service.update_task(task.id, {"status": "Done", "title": "Write the docs"})

    assert updated is not None
    assert updated.title == "Write the docs"
    assert updated.status is TaskStatus.DONE
    assert updated.description == "Draft"
    assert updated.assignee == "Ann"
    assert updated.id == task.id
    assert updated.created_at == task.created_at
    assert updated.updated_at > task.updated_at


def test_update_task_is_strictly_later_even_with_a_stopped_clock() -> None:
    service = make_service()
    task = service.add_task(task_data("Same instant"))

    updated = service.update_task(task.id, {"priority": "High"})

    assert updated.updated_at > task.updated_at
    assert updated.created_at <= updated.updated_at


def test_update_task_never_touches_id_or_created_at() -> None:
    clock = FakeClock()
    service = make_service(clock)
    task = service.add_task(task_data("Pinned"))
    clock.advance()

    updated = service.update_task(task.id, {"id": "other", "created_at": clock.now})

    assert updated.id == task.id
    assert updated.created_at == task.created_at
    assert service.get_task("other") is None


def test_update_task_with_none_clears_optional_fields_only() -> None:
    service = make_service()
    task = service.add_task(
        task_data("Ship", description="Notes", assignee="Bo", due_date=date(2024, 2, 1))
    )

    updated = service.update_task(
        task.id,
        {"description": None, "due_date": None, "title": None, "status": None},
    )

    assert updated.description is None
    assert updated.due_date is None
    assert updated.assignee == "Bo"
    assert updated.title == "Ship"
    assert updated.status is TaskStatus.TO_DO
    assert "description" not in updated.to_dict()
    assert "due_date" not in updated.to_dict()


def test_update_task_keeps_position_in_collection() -> None:
    service = make_service()
    a = service.add_task(task_data("A"))
    b = service.add_task(task_data("B"))
    c = service.add_task(task_data("C"))

    service.update_task(b.id, {"title": "B2"})

    assert [t.title for t in service.list_tasks()] == ["A", "B2", "C"]
    assert [t.id for t in service.list_tasks()] == [a.id, b.id, c.id]


def test_update_and_delete_missing_task_are_noops() -> None:
    service = make_service()
    service.add_task(task_data("Keep"))
    before = service.list_tasks()

    assert service.update_task("missing", {"title": "Nope"}) is None
    service.delete_task("missing")

    assert service.list_tasks() == before


def test_update_task_rejects_unknown_status() -> None:
    service = make_service()
    task = service.add_task(task_data("Strict"))

    with pytest.raises(ValueError):
        service.update_task(task.id, {"status": "Blocked"})


def test_delete_task_removes_it() -> None:
    service = make_service()
    a = service.add_task(task_data("A"))
    b = service.add_task(task_data("B"))

    service.delete_task(a.id)

    assert service.list_tasks() == [b]
    assert service.get_task(a.id) is None


def test_filtered_tasks_default_to_everything_in_insertion_order() -> None:
    service = make_service()
    titles = ["One", "Two", "Three"]
    for title in titles:
        service.add_task(task_data(title))

    assert [t.title for t in service.get_filtered_tasks()] == titles
    assert not service.has_active_filters()


def test_status_filter_preserves_relative_order() -> None:
    service = make_service()
    service.add_task(task_data("A", status="Done"))
    service.add_task(task_data("B", status="To Do"))
    service.add_task(task_data("C", status="Done"))

    service.set_filter("status", "Done")

    assert [t.title for t in service.get_filtered_tasks()] == ["A", "C"]
    assert len(service.list_tasks()) == 3


def test_search_filter_is_case_insensitive_on_title() -> None:
    service = make_service()
    seed_demo_tasks(service)

    service.set_filter("search", "setup")

    assert [t.title for t in service.get_filtered_tasks()] == ["Setup project structure"]


def test_clear_filters_restores_full_set() -> None:
    service = make_service()
    seed_demo_tasks(service)
    service.set_filter("status", "Done")
    service.set_filter("search", "x")
    assert service.get_filtered_tasks() == []

    service.clear_filters()

    assert service.get_filtered_tasks() == service.list_tasks()
    assert not service.has_active_filters()


def test_set_filter_with_empty_value_clears_that_key() -> None:
    service = make_service()
    service.set_filter("priority", "High")
    service.set_filter("search", "docs")

    service.set_filter("priority", "")

    assert service.filters.priority is None
    assert service.filters.search == "docs"


def test_set_filter_rejects_unknown_key() -> None:
    service = make_service()

    with pytest.raises(ValueError):
        service.set_filter("assignee", "Ann")


def test_tasks_by_status_groups_filtered_tasks_per_column() -> None:
    service = make_service()
    seed_demo_tasks(service)
    service.set_filter("priority", "High")

    columns = service.tasks_by_status()

    assert list(columns) == [TaskStatus.TO_DO, TaskStatus.IN_PROGRESS, TaskStatus.DONE]
    assert columns[TaskStatus.TO_DO] == []
    assert [t.title for t in columns[TaskStatus.IN_PROGRESS]] == ["Implement task CRUD operations"]
    assert [t.title for t in columns[TaskStatus.DONE]] == ["Setup project structure"]


def test_move_task_only_updates_on_status_change() -> None:
    clock = FakeClock()
    service = make_service(clock)
    task = service.add_task(task_data("Move me"))
    clock.advance()

    same = service.move_task(task.id, TaskStatus.TO_DO)
    moved = service.move_task(task.id, "In Progress")

    assert same.updated_at == task.updated_at
    assert moved.status is TaskStatus.IN_PROGRESS
    assert moved.updated_at > task.updated_at
    assert service.move_task("missing", "Done") is None


def test_available_moves_excludes_current_status() -> None:
    service = make_service()
    task = service.add_task(task_data("Menu", status="In Progress"))

    assert service.available_moves(task) == [TaskStatus.TO_DO, TaskStatus.DONE]


def test_subscribers_are_notified_after_each_write() -> None:
    service = make_service()
    snapshots: list[BoardSnapshot] = []
    unsubscribe = service.subscribe(snapshots.append)

    task = service.add_task(task_data("Observed"))
    service.update_task(task.id, {"status": "Done"})
    service.set_filter("status", "Done")
    service.clear_filters()
    service.delete_task(task.id)

    assert len(snapshots) == 5
    assert snapshots[0].tasks == (task,)
    assert snapshots[1].tasks[0].status is TaskStatus.DONE
    assert snapshots[2].filters.status is TaskStatus.DONE
    assert snapshots[3].filters.is_empty()
    assert snapshots[4].tasks == ()

    unsubscribe()
    service.add_task(task_data("Unobserved"))
    assert len(snapshots) == 5


def test_listener_sees_state_after_write() -> None:
    service = make_service()
    seen: list[int] = []
    service.subscribe(lambda snapshot: seen.append(len(service.get_filtered_tasks())))

    service.add_task(task_data("One"))
    service.add_task(task_data("Two"))

    assert seen == [1, 2]


def test_seed_demo_tasks_leaves_optional_fields_absent() -> None:
    service = make_service()
    seed_demo_tasks(service)

    tasks = service.list_tasks()

    assert len(tasks) == 3
    assert tasks[0].due_date is None
    assert "due_date" not in tasks[0].to_dict()
    assert tasks[2].assignee is None
    assert tasks[1].due_date == date(2024, 1, 15)
