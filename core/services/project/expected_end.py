from __future__ import annotations

import logging
from datetime import date

from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository, TaskRepository
from core.models import Project
from core.services.dashboard.calculations import latest_end_date

logger = logging.getLogger(__name__)


def refresh_expected_end_date(
    project_repo: ProjectRepository,
    task_repo: TaskRepository,
    project_id: str,
) -> tuple[Project, bool]:
    """
    Align ``actual_expected_end_date`` with the latest deadline among the
    project's non-backlog tasks. The caller owns the commit.

    Returns the project and whether it was modified. Without any dated task
    the stored value is left untouched.
    """
    project = project_repo.get(project_id)
    if not project:
        raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

    planned = [task for task in task_repo.list_by_project(project_id) if not task.is_backlog]
    latest: date | None = latest_end_date(planned)
    if latest is None or latest == project.actual_expected_end_date:
        return project, False

    logger.info(
        "Project %s expected end date %s -> %s",
        project_id,
        project.actual_expected_end_date,
        latest,
    )
    project.actual_expected_end_date = latest
    project_repo.update(project)
    return project, True


__all__ = ["refresh_expected_end_date"]
