from __future__ import annotations

from datetime import date
from typing import Callable

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents, domain_events
from core.interfaces import ProjectRepository, SprintRepository, TaskRepository
from core.services.dashboard.dates import today_utc
from core.services.sprint.lifecycle import SprintLifecycleMixin
from core.services.sprint.query import SprintQueryMixin


class SprintService(SprintLifecycleMixin, SprintQueryMixin):
    def __init__(
        self,
        session: Session,
        sprint_repo: SprintRepository,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        events: DomainEvents | None = None,
        clock: Callable[[], date] | None = None,
    ):
        self._session: Session = session
        self._sprint_repo: SprintRepository = sprint_repo
        self._project_repo: ProjectRepository = project_repo
        self._task_repo: TaskRepository = task_repo
        self._events: DomainEvents = events or domain_events
        self._clock: Callable[[], date] = clock or today_utc


__all__ = ["SprintService"]
