from __future__ import annotations

from datetime import date

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ProjectRepository, SprintRepository
from core.models import Sprint


class TaskValidationMixin:
    _project_repo: ProjectRepository
    _sprint_repo: SprintRepository

    def _validate_task_title(self, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Task title cannot be empty.", code="TASK_TITLE_EMPTY")

    def _validate_dates(self, start_date: date | None, end_date: date | None) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("Task end date cannot be before start date.", code="TASK_INVALID_DATE")

    def _validate_hours(self, estimated_hours: float | None, actual_hours: float | None) -> None:
        if estimated_hours is not None and estimated_hours < 0:
            raise ValidationError("Estimated hours cannot be negative.", code="TASK_NEGATIVE_HOURS")
        if actual_hours is not None and actual_hours < 0:
            raise ValidationError("Actual hours cannot be negative.", code="TASK_NEGATIVE_HOURS")

    def _require_project_exists(self, project_id: str) -> None:
        if not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

    def _validate_sprint_for_project(self, project_id: str, sprint_id: str | None) -> Sprint | None:
        if sprint_id is None:
            return None
        sprint = self._sprint_repo.get(sprint_id)
        if not sprint:
            raise NotFoundError("Sprint not found.", code="SPRINT_NOT_FOUND")
        if sprint.project_id != project_id:
            raise ValidationError(
                "Sprint belongs to a different project.",
                code="TASK_SPRINT_OTHER_PROJECT",
            )
        return sprint


__all__ = ["TaskValidationMixin"]
