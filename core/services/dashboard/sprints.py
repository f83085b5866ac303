from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from core.services.dashboard.models import ALL_SPRINTS, SelectedSprintData

if TYPE_CHECKING:
    from core.services.sprint.service import SprintService


@dataclass(frozen=True)
class SprintOption:
    id: str
    name: str
    status: str


class DashboardSprintMixin:
    _sprints: "SprintService"

    def list_sprint_options(self, project_id: str) -> List[SprintOption]:
        return [
            SprintOption(id=sprint.id, name=sprint.name, status=sprint.status.value)
            for sprint in self._sprints.list_sprints(project_id)
        ]

    def selected_sprint_data(
        self,
        project_id: str | None,
        sprint_filter: str | None,
    ) -> Optional[SelectedSprintData]:
        """Planned period of the filtered sprint; None for 'all', unset or unknown names."""
        if not project_id or not sprint_filter or sprint_filter == ALL_SPRINTS:
            return None
        sprint = self._sprints.find_sprint_by_name(project_id, sprint_filter)
        if sprint is None:
            return None
        return SelectedSprintData(
            expect_date=sprint.expect_date,
            expect_end_date=sprint.expect_end_date,
        )


__all__ = ["SprintOption", "DashboardSprintMixin"]
