from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents, domain_events
from core.interfaces import ProjectRepository, SprintRepository, TaskRepository
from core.services.task.lifecycle import TaskLifecycleMixin
from core.services.task.query import TaskQueryMixin
from core.services.task.validation import TaskValidationMixin


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskService(
    TaskLifecycleMixin,
    TaskQueryMixin,
    TaskValidationMixin,
):
    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        sprint_repo: SprintRepository,
        project_repo: ProjectRepository,
        events: DomainEvents | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._session: Session = session
        self._task_repo: TaskRepository = task_repo
        self._sprint_repo: SprintRepository = sprint_repo
        self._project_repo: ProjectRepository = project_repo
        self._events: DomainEvents = events or domain_events
        self._clock: Callable[[], datetime] = clock or utc_now


__all__ = ["TaskService", "utc_now"]
