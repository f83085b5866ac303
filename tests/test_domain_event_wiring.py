from datetime import date

import pytest

from core.exceptions import ValidationError
from core.models import SprintStatus, TaskStatus


def _record(signal):
    seen: list[str] = []
    signal.connect(seen.append)
    return seen


def test_project_create_and_update_emit_project_changed(services, events):
    ps = services["project_service"]
    seen = _record(events.project_changed)

    project = ps.create_project("Event Project")
    ps.update_project(project.id, name="Event Project V2")

    assert seen == [project.id, project.id]


def test_sprint_operations_emit_sprints_changed(services, events):
    project = services["project_service"].create_project("Sprints")
    ss = services["sprint_service"]
    seen = _record(events.sprints_changed)

    sprint = ss.create_sprint(project.id, "Sprint 1", date(2024, 1, 1), date(2024, 1, 14))
    ss.set_status(sprint.id, SprintStatus.IN_PROGRESS)
    ss.update_sprint(sprint.id, expect_end_date=date(2024, 1, 21))

    assert seen == [project.id] * 3


def test_sprint_delete_also_emits_tasks_changed(services, events):
    project = services["project_service"].create_project("Sprints")
    sprint = services["sprint_service"].create_sprint(project.id, "Sprint 1")
    tasks_seen = _record(events.tasks_changed)

    services["sprint_service"].delete_sprint(sprint.id)

    assert tasks_seen == [project.id]


def test_task_operations_emit_tasks_changed(services, events):
    project = services["project_service"].create_project("Tasks")
    ts = services["task_service"]
    seen = _record(events.tasks_changed)

    task = ts.create_task(project.id, "Task A")
    ts.set_status(task.id, TaskStatus.IN_PROGRESS)
    ts.move_to_backlog(task.id)
    ts.delete_task(task.id)

    assert seen == [project.id] * 4


def test_failed_validation_emits_nothing(services, events):
    project = services["project_service"].create_project("Tasks")
    seen = _record(events.tasks_changed)

    with pytest.raises(ValidationError):
        services["task_service"].create_task(project.id, "")

    assert seen == []
