from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import ProjectRepository, SprintRepository, TaskRepository
from core.models import Sprint, SprintStatus

logger = logging.getLogger(__name__)

_UNSET = object()


class SprintLifecycleMixin:
    _session: Session
    _sprint_repo: SprintRepository
    _project_repo: ProjectRepository
    _task_repo: TaskRepository
    _events: DomainEvents
    _clock: Callable[[], date]

    # --------------------------------------------------------------
    # Validation
    # --------------------------------------------------------------

    def _validate_sprint_name(self, project_id: str, name: str, *, exclude_id: str | None = None) -> None:
        if not name or not name.strip():
            raise ValidationError("Sprint name cannot be empty.", code="SPRINT_NAME_EMPTY")
        existing = self.find_sprint_by_name(project_id, name)
        if existing is not None and existing.id != exclude_id:
            raise BusinessRuleError(
                f"Sprint '{name.strip()}' already exists in this project.",
                code="SPRINT_NAME_DUPLICATE",
            )

    @staticmethod
    def _validate_period(expect_date: date | None, expect_end_date: date | None) -> None:
        if expect_date and expect_end_date and expect_end_date < expect_date:
            raise ValidationError("Sprint end cannot be before its start.", code="SPRINT_INVALID_PERIOD")

    def _require_sprint(self, sprint_id: str) -> Sprint:
        sprint = self._sprint_repo.get(sprint_id)
        if not sprint:
            raise NotFoundError("Sprint not found.", code="SPRINT_NOT_FOUND")
        return sprint

    # --------------------------------------------------------------
    # Mutations
    # --------------------------------------------------------------

    def create_sprint(
        self,
        project_id: str,
        name: str,
        expect_date: date | None = None,
        expect_end_date: date | None = None,
        status: SprintStatus = SprintStatus.PENDING,
    ) -> Sprint:
        if not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        self._validate_sprint_name(project_id, name)
        self._validate_period(expect_date, expect_end_date)

        sprint = Sprint.create(
            project_id=project_id,
            name=name.strip(),
            expect_date=expect_date,
            expect_end_date=expect_end_date,
            start_date=self._clock(),
            status=SprintStatus(status),
        )
        try:
            self._sprint_repo.add(sprint)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating sprint: %s", e)
            raise

        logger.info("Created sprint %s (%s) in project %s", sprint.id, sprint.name, project_id)
        self._events.sprints_changed.emit(project_id)
        return sprint

    def update_sprint(
        self,
        sprint_id: str,
        name: str | None = None,
        expect_date=_UNSET,
        expect_end_date=_UNSET,
    ) -> Sprint:
        sprint = self._require_sprint(sprint_id)
        if name is not None:
            self._validate_sprint_name(sprint.project_id, name, exclude_id=sprint_id)
            sprint.name = name.strip()
        if expect_date is not _UNSET:
            sprint.expect_date = expect_date
        if expect_end_date is not _UNSET:
            sprint.expect_end_date = expect_end_date
        self._validate_period(sprint.expect_date, sprint.expect_end_date)

        try:
            self._sprint_repo.update(sprint)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        self._events.sprints_changed.emit(sprint.project_id)
        return sprint

    def set_status(self, sprint_id: str, status: SprintStatus) -> Sprint:
        """
        Move a sprint to ``status``. Completing a sprint stamps its end date
        and starts the next pending sprint of the project, if any.
        """
        sprint = self._require_sprint(sprint_id)
        status = SprintStatus(status)
        sprint.status = status
        sprint.end_date = self._clock() if status == SprintStatus.DONE else None

        promoted: Sprint | None = None
        if status == SprintStatus.DONE:
            candidate = self.next_sprint(sprint)
            if candidate is not None and candidate.status == SprintStatus.PENDING:
                candidate.status = SprintStatus.IN_PROGRESS
                promoted = candidate

        try:
            self._sprint_repo.update(sprint)
            if promoted is not None:
                self._sprint_repo.update(promoted)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info("Sprint %s is now %s", sprint_id, status.value)
        if promoted is not None:
            logger.info("Sprint %s started after %s was completed", promoted.id, sprint_id)
        self._events.sprints_changed.emit(sprint.project_id)
        return sprint

    def delete_sprint(self, sprint_id: str) -> None:
        sprint = self._require_sprint(sprint_id)
        try:
            self._task_repo.clear_sprint(sprint_id)
            self._sprint_repo.delete(sprint_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting sprint %s: %s", sprint_id, e)
            raise

        logger.info("Deleted sprint %s (%s)", sprint_id, sprint.name)
        self._events.sprints_changed.emit(sprint.project_id)
        self._events.tasks_changed.emit(sprint.project_id)


__all__ = ["SprintLifecycleMixin"]
