from __future__ import annotations

from typing import List

from core.interfaces import ProjectRepository
from core.models import Project, ProjectStatus

OPEN_STATUSES = (ProjectStatus.ACTIVE, ProjectStatus.ON_HOLD)


class ProjectQueryMixin:
    _project_repo: ProjectRepository

    def list_projects(self) -> List[Project]:
        return sorted(self._project_repo.list_all(), key=lambda project: project.name.lower())

    def get_project(self, project_id: str) -> Project | None:
        return self._project_repo.get(project_id)

    def list_open_projects(self) -> List[Project]:
        """Projects still being worked on (active or on hold)."""
        return [project for project in self.list_projects() if project.status in OPEN_STATUSES]


__all__ = ["ProjectQueryMixin"]
