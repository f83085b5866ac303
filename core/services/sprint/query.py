from __future__ import annotations

from datetime import date
from typing import List

from core.interfaces import SprintRepository
from core.models import Sprint, SprintStatus


def _schedule_order(sprint: Sprint) -> tuple:
    return (sprint.expect_date is None, sprint.expect_date or date.max, sprint.name.lower())


class SprintQueryMixin:
    _sprint_repo: SprintRepository

    def get_sprint(self, sprint_id: str) -> Sprint | None:
        return self._sprint_repo.get(sprint_id)

    def list_sprints(self, project_id: str) -> List[Sprint]:
        """Sprints of a project in planned order; undated ones last."""
        return sorted(self._sprint_repo.list_by_project(project_id), key=_schedule_order)

    def find_sprint_by_name(self, project_id: str, name: str) -> Sprint | None:
        wanted = name.strip().lower()
        for sprint in self._sprint_repo.list_by_project(project_id):
            if sprint.name.strip().lower() == wanted:
                return sprint
        return None

    def active_sprints(self, project_id: str) -> List[Sprint]:
        return [sprint for sprint in self.list_sprints(project_id) if sprint.status == SprintStatus.IN_PROGRESS]

    def next_sprint(self, sprint: Sprint) -> Sprint | None:
        """Earliest sprint of the same project planned to start after ``sprint`` ends."""
        if sprint.expect_end_date is None:
            return None
        candidates = [
            other
            for other in self._sprint_repo.list_by_project(sprint.project_id)
            if other.id != sprint.id and other.expect_date and other.expect_date > sprint.expect_end_date
        ]
        if not candidates:
            return None
        return min(candidates, key=_schedule_order)


__all__ = ["SprintQueryMixin"]
