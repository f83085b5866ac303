from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from core.exceptions import NotFoundError
from core.models import Project, Sprint, Task, TaskStatus
from core.services.dashboard.aggregates import calculate_metrics, precompute_on_time
from core.services.dashboard.models import (
    DashboardData,
    DashboardProject,
    ProjectInfo,
    ProjectOption,
    ScheduleInfo,
    ScheduleTaskInfo,
)

if TYPE_CHECKING:
    from core.services.project.service import ProjectService
    from core.services.sprint.service import SprintService
    from core.services.task.service import TaskService

logger = logging.getLogger(__name__)

ALL_PROJECTS = "all"
ALL_PROJECTS_NAME = "Todos os Projetos"
ALL_PROJECTS_DESCRIPTION = "Dados agregados"
SCHEDULE_ACTIVE = "active"


def _project_info(project: Project) -> ProjectInfo:
    return ProjectInfo(
        id=project.id,
        name=project.name,
        description=project.description or "",
        start_date=project.start_date,
        end_date=project.end_date,
        actual_expected_end_date=project.actual_expected_end_date,
        status=project.status.value,
        health=project.health,
        priority=project.priority,
    )


def _task_row(
    task: Task,
    project: Project,
    sprint: Optional[Sprint],
    today: date,
) -> ScheduleTaskInfo:
    status = task.status.value
    return ScheduleTaskInfo(
        id=task.id,
        title=task.title,
        status=status,
        estimated_hours=float(task.estimated_hours or 0.0),
        actual_hours=float(task.actual_hours or 0.0),
        created=task.created_at,
        updated=task.updated_at,
        start_date=task.start_date,
        end_date=task.end_date,
        sprint=sprint.name if sprint else None,
        sprint_status=sprint.status.value if sprint else None,
        schedule_id=project.id,
        schedule_name=project.name,
        is_backlog=task.is_backlog,
        on_time=precompute_on_time(status, task.end_date, task.updated_at, today),
        assignee=task.assignee,
        description=task.description or "",
    )


def _schedule_for(project: Project, tasks: List[Task]) -> ScheduleInfo:
    planned = [task for task in tasks if not task.is_backlog]
    return ScheduleInfo(
        id=project.id,
        name=project.name,
        status=SCHEDULE_ACTIVE,
        description=project.description or "",
        start_date=project.start_date,
        expected_end_date=project.end_date,
        actual_end_date=project.actual_expected_end_date,
        total_tasks=len(planned),
        completed_tasks=sum(1 for task in planned if task.status == TaskStatus.COMPLETED),
        total_estimated_hours=sum(float(task.estimated_hours or 0.0) for task in planned),
        total_actual_hours=sum(float(task.actual_hours or 0.0) for task in planned),
    )


class DashboardLoaderMixin:
    """Reads projects, sprints and tasks and shapes them into the dashboard DTOs."""

    _projects: "ProjectService"
    _sprints: "SprintService"
    _tasks: "TaskService"
    _clock: Callable[[], date]
    _cache: Dict[tuple, DashboardData]

    def _require_project(self, project_id: str) -> Project:
        project = self._projects.get_project(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def get_project_info(self, project_id: str) -> ProjectInfo:
        return _project_info(self._require_project(project_id))

    def get_available_projects(self) -> List[ProjectOption]:
        return [
            ProjectOption(id=project.id, name=project.name, description=project.description or "")
            for project in self._projects.list_projects()
        ]

    def get_dashboard_data(self, project_id: str | None, today: date | None = None) -> DashboardData:
        today = today or self._clock()
        if not project_id or project_id == ALL_PROJECTS:
            return DashboardData(
                project=DashboardProject(
                    id=None,
                    name=ALL_PROJECTS_NAME,
                    description=ALL_PROJECTS_DESCRIPTION,
                ),
                metrics=calculate_metrics([], [], today),
            )

        key = (project_id, today)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        project = self._require_project(project_id)
        tasks = self._tasks.list_tasks_for_project(project_id)
        sprints = {sprint.id: sprint for sprint in self._sprints.list_sprints(project_id)}

        schedules = [_schedule_for(project, tasks)] if tasks else []
        rows = [
            _task_row(task, project, sprints.get(task.sprint_id) if task.sprint_id else None, today)
            for task in tasks
        ]
        data = DashboardData(
            project=DashboardProject(
                id=project.id,
                name=project.name,
                description=project.description or "",
            ),
            schedules=tuple(schedules),
            tasks=tuple(rows),
            metrics=calculate_metrics(rows, schedules, today),
        )
        self._cache[key] = data
        logger.debug("Loaded dashboard data for project %s (%d task(s))", project_id, len(rows))
        return data


__all__ = ["ALL_PROJECTS", "ALL_PROJECTS_NAME", "DashboardLoaderMixin"]
