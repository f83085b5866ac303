from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ProjectRepository, SprintRepository, TaskRepository
from core.models import Project, ProjectStatus
from core.services.project.expected_end import refresh_expected_end_date
from core.services.project.validation import ProjectValidationMixin

logger = logging.getLogger(__name__)

_UNSET = object()


class ProjectLifecycleMixin(ProjectValidationMixin):
    _session: Session
    _project_repo: ProjectRepository
    _sprint_repo: SprintRepository
    _task_repo: TaskRepository
    _events: DomainEvents

    def create_project(
        self,
        name: str,
        description: str = "",
        start_date: date | None = None,
        end_date: date | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
        priority: str = "medium",
    ) -> Project:
        self._validate_project_name(name)
        self._validate_project_dates(start_date, end_date)
        self._validate_priority(priority)
        project = Project.create(
            name=name.strip(),
            description=description.strip(),
            start_date=start_date,
            end_date=end_date,
            status=status,
            priority=priority,
        )

        try:
            self._project_repo.add(project)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise

        logger.info("Created project %s - %s", project.id, project.name)
        self._events.project_changed.emit(project.id)
        return project

    def update_project(
        self,
        project_id: str,
        name: str | None = None,
        description: str | None = None,
        status: ProjectStatus | None = None,
        start_date=_UNSET,
        end_date=_UNSET,
        health: str | None = None,
        priority: str | None = None,
    ) -> Project:
        """Apply the given changes; dates accept None to clear them."""
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        if name is not None:
            self._validate_project_name(name, exclude_id=project_id)
            project.name = name.strip()
        if description is not None:
            project.description = description.strip()
        if status is not None:
            project.status = ProjectStatus(status)
        if start_date is not _UNSET:
            project.start_date = start_date
        if end_date is not _UNSET:
            project.end_date = end_date
        self._validate_project_dates(project.start_date, project.end_date)
        if health is not None:
            if not health.strip():
                raise ValidationError("Project health cannot be empty.", code="PROJECT_HEALTH_EMPTY")
            project.health = health.strip()
        if priority is not None:
            self._validate_priority(priority)
            project.priority = priority

        try:
            self._project_repo.update(project)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info("Updated project %s", project_id)
        self._events.project_changed.emit(project_id)
        return project

    def set_status(self, project_id: str, status: ProjectStatus) -> Project:
        return self.update_project(project_id, status=status)

    def sync_expected_end_date(self, project_id: str) -> date | None:
        """Recompute the current expected end date from the project's tasks."""
        try:
            project, changed = refresh_expected_end_date(self._project_repo, self._task_repo, project_id)
            if changed:
                self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        if changed:
            self._events.project_changed.emit(project_id)
        return project.actual_expected_end_date

    def delete_project(self, project_id: str) -> None:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        try:
            self._task_repo.delete_by_project(project_id)
            self._sprint_repo.delete_by_project(project_id)
            self._project_repo.delete(project_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting project %s: %s", project_id, e)
            raise

        logger.info("Deleted project %s - %s", project_id, project.name)
        self._events.project_changed.emit(project_id)


__all__ = ["ProjectLifecycleMixin"]
