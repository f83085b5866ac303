from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Callable, Dict

from core.events.domain_events import DomainEvents, domain_events
from core.services.dashboard.calculations import compute_dashboard
from core.services.dashboard.dates import today_utc
from core.services.dashboard.loader import ALL_PROJECTS, DashboardLoaderMixin
from core.services.dashboard.models import DashboardCalculations, DashboardData
from core.services.dashboard.sprints import DashboardSprintMixin

if TYPE_CHECKING:
    from core.services.project.service import ProjectService
    from core.services.sprint.service import SprintService
    from core.services.task.service import TaskService

logger = logging.getLogger(__name__)


class DashboardService(DashboardLoaderMixin, DashboardSprintMixin):
    """
    Feeds the project dashboard.

    Loaded bundles are kept per project and dropped as soon as the project,
    its sprints or its tasks change, so repeated reads between edits hit
    neither the database nor the metrics engine.
    """

    def __init__(
        self,
        project_service: "ProjectService",
        sprint_service: "SprintService",
        task_service: "TaskService",
        events: DomainEvents | None = None,
        clock: Callable[[], date] | None = None,
    ):
        self._projects = project_service
        self._sprints = sprint_service
        self._tasks = task_service
        self._events: DomainEvents = events or domain_events
        self._clock: Callable[[], date] = clock or today_utc
        self._cache: Dict[tuple, DashboardData] = {}

        self._events.project_changed.connect(self.invalidate)
        self._events.tasks_changed.connect(self.invalidate)
        self._events.sprints_changed.connect(self.invalidate)

    # --------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------

    def today(self) -> date:
        return self._clock()

    def get_calculations(
        self,
        project_id: str | None,
        sprint_filter: str | None = None,
        today: date | None = None,
    ) -> DashboardCalculations:
        today = today or self._clock()
        data = self.get_dashboard_data(project_id, today=today)
        if not project_id or project_id == ALL_PROJECTS:
            project = None
        else:
            project = self.get_project_info(project_id)
        selected = self.selected_sprint_data(project_id, sprint_filter)
        return compute_dashboard(data, project, sprint_filter, selected, today)

    def invalidate(self, project_id: str | None = None) -> None:
        if project_id is None:
            self._cache.clear()
            return
        stale = [key for key in self._cache if key[0] == project_id]
        for key in stale:
            del self._cache[key]
        if stale:
            logger.debug("Dropped cached dashboard data for project %s", project_id)

    def close(self) -> None:
        self._events.project_changed.disconnect(self.invalidate)
        self._events.tasks_changed.disconnect(self.invalidate)
        self._events.sprints_changed.disconnect(self.invalidate)
        self._cache.clear()


__all__ = ["DashboardService"]
