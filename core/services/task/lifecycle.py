from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents
from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository, SprintRepository, TaskRepository
from core.models import Task, TaskStatus
from core.services.project.expected_end import refresh_expected_end_date

logger = logging.getLogger(__name__)

_UNSET = object()


class TaskLifecycleMixin:
    _session: Session
    _task_repo: TaskRepository
    _sprint_repo: SprintRepository
    _project_repo: ProjectRepository
    _events: DomainEvents
    _clock: Callable[[], datetime]

    def _require_task(self, task_id: str) -> Task:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return task

    def _commit_task_change(self, project_id: str) -> None:
        """Commit pending task writes together with the project's expected end date."""
        try:
            self._session.flush()
            _, project_moved = refresh_expected_end_date(self._project_repo, self._task_repo, project_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        self._events.tasks_changed.emit(project_id)
        if project_moved:
            self._events.project_changed.emit(project_id)

    def _save(self, task: Task) -> Task:
        task.updated_at = self._clock()
        try:
            self._task_repo.update(task)
        except Exception:
            self._session.rollback()
            raise
        self._commit_task_change(task.project_id)
        return task

    def create_task(
        self,
        project_id: str,
        title: str,
        description: str = "",
        status: TaskStatus = TaskStatus.TODO,
        estimated_hours: float = 0.0,
        actual_hours: float = 0.0,
        assignee: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        sprint_id: Optional[str] = None,
        is_backlog: bool = False,
    ) -> Task:
        self._require_project_exists(project_id)
        self._validate_task_title(title)
        self._validate_hours(estimated_hours, actual_hours)
        self._validate_dates(start_date, end_date)
        self._validate_sprint_for_project(project_id, sprint_id)

        now = self._clock()
        task = Task.create(
            project_id=project_id,
            title=title.strip(),
            description=description.strip(),
            status=TaskStatus(status),
            estimated_hours=float(estimated_hours),
            actual_hours=float(actual_hours),
            assignee=(assignee or "").strip() or None,
            start_date=start_date,
            end_date=end_date,
            sprint_id=sprint_id,
            is_backlog=is_backlog,
            created_at=now,
            updated_at=now,
        )

        try:
            self._task_repo.add(task)
        except Exception as exc:
            self._session.rollback()
            logger.error("Error creating task: %s", exc)
            raise
        self._commit_task_change(project_id)
        logger.info("Created task %s - %s for project %s", task.id, task.title, project_id)
        return task

    def update_task(
        self,
        task_id: str,
        title: str | None = None,
        description: str | None = None,
        estimated_hours: float | None = None,
        actual_hours: float | None = None,
        assignee=_UNSET,
        start_date=_UNSET,
        end_date=_UNSET,
    ) -> Task:
        """Apply field edits; assignee and dates accept None to clear them."""
        task = self._require_task(task_id)

        if title is not None:
            self._validate_task_title(title)
            task.title = title.strip()
        if description is not None:
            task.description = description.strip()
        self._validate_hours(estimated_hours, actual_hours)
        if estimated_hours is not None:
            task.estimated_hours = float(estimated_hours)
        if actual_hours is not None:
            task.actual_hours = float(actual_hours)
        if assignee is not _UNSET:
            task.assignee = (assignee or "").strip() or None
        if start_date is not _UNSET:
            task.start_date = start_date
        if end_date is not _UNSET:
            task.end_date = end_date
        self._validate_dates(task.start_date, task.end_date)

        return self._save(task)

    def set_status(self, task_id: str, status: TaskStatus) -> Task:
        task = self._require_task(task_id)
        task.status = TaskStatus(status)
        logger.info("Task %s is now %s", task_id, task.status.value)
        return self._save(task)

    def move_to_backlog(self, task_id: str) -> Task:
        task = self._require_task(task_id)
        task.is_backlog = True
        task.sprint_id = None
        return self._save(task)

    def restore_from_backlog(self, task_id: str, sprint_id: str | None = None) -> Task:
        task = self._require_task(task_id)
        self._validate_sprint_for_project(task.project_id, sprint_id)
        task.is_backlog = False
        task.sprint_id = sprint_id
        return self._save(task)

    def assign_to_sprint(self, task_id: str, sprint_id: str | None) -> Task:
        task = self._require_task(task_id)
        self._validate_sprint_for_project(task.project_id, sprint_id)
        task.sprint_id = sprint_id
        return self._save(task)

    def delete_task(self, task_id: str) -> None:
        task = self._require_task(task_id)
        try:
            self._task_repo.delete(task_id)
        except Exception:
            self._session.rollback()
            raise
        self._commit_task_change(task.project_id)
        logger.info("Deleted task %s - %s", task_id, task.title)


__all__ = ["TaskLifecycleMixin"]
