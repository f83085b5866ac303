from __future__ import annotations

from core.models import Project, Sprint, Task
from infra.db.models import ProjectORM, SprintORM, TaskORM


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        name=project.name,
        description=project.description,
        start_date=project.start_date,
        end_date=project.end_date,
        actual_expected_end_date=project.actual_expected_end_date,
        status=project.status,
        health=project.health,
        priority=project.priority,
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        name=obj.name,
        description=obj.description or "",
        start_date=obj.start_date,
        end_date=obj.end_date,
        actual_expected_end_date=obj.actual_expected_end_date,
        status=obj.status,
        health=obj.health or "healthy",
        priority=obj.priority or "medium",
    )


def sprint_to_orm(sprint: Sprint) -> SprintORM:
    return SprintORM(
        id=sprint.id,
        project_id=sprint.project_id,
        name=sprint.name,
        expect_date=sprint.expect_date,
        expect_end_date=sprint.expect_end_date,
        start_date=sprint.start_date,
        end_date=sprint.end_date,
        status=sprint.status,
    )


def sprint_from_orm(obj: SprintORM) -> Sprint:
    return Sprint(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        expect_date=obj.expect_date,
        expect_end_date=obj.expect_end_date,
        start_date=obj.start_date,
        end_date=obj.end_date,
        status=obj.status,
    )


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        project_id=task.project_id,
        sprint_id=task.sprint_id,
        title=task.title,
        description=task.description,
        status=task.status,
        estimated_hours=task.estimated_hours,
        actual_hours=task.actual_hours,
        assignee=task.assignee,
        start_date=task.start_date,
        end_date=task.end_date,
        is_backlog=task.is_backlog,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        project_id=obj.project_id,
        sprint_id=obj.sprint_id,
        title=obj.title,
        description=obj.description or "",
        status=obj.status,
        estimated_hours=obj.estimated_hours or 0.0,
        actual_hours=obj.actual_hours or 0.0,
        assignee=obj.assignee,
        start_date=obj.start_date,
        end_date=obj.end_date,
        is_backlog=bool(obj.is_backlog),
        created_at=obj.created_at,
        updated_at=obj.updated_at,
    )


__all__ = [
    "project_to_orm",
    "project_from_orm",
    "sprint_to_orm",
    "sprint_from_orm",
    "task_to_orm",
    "task_from_orm",
]
