from __future__ import annotations

from datetime import date

from core.exceptions import ValidationError
from core.interfaces import ProjectRepository

PRIORITIES = ("low", "medium", "high", "critical")


class ProjectValidationMixin:
    _project_repo: ProjectRepository

    def _validate_project_name(self, name: str, *, exclude_id: str | None = None) -> None:
        if not name or not name.strip():
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY")

        for project in self._project_repo.list_all():
            if project.id == exclude_id:
                continue
            if project.name.strip().lower() == name.strip().lower():
                raise ValidationError("A project with this name already exists.", code="PROJECT_NAME_DUPLICATE")

    def _validate_project_dates(self, start_date: date | None, end_date: date | None) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("Project end date cannot be before start date.", code="PROJECT_INVALID_DATES")

    def _validate_priority(self, priority: str) -> None:
        if priority not in PRIORITIES:
            raise ValidationError(f"Unknown project priority '{priority}'.", code="PROJECT_INVALID_PRIORITY")


__all__ = ["PRIORITIES", "ProjectValidationMixin"]
