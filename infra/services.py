from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from core.events.domain_events import DomainEvents
from core.services.dashboard import DashboardService
from core.services.project import ProjectService
from core.services.sprint import SprintService
from core.services.task import TaskService
from infra.db.repositories import (
    SqlAlchemyProjectRepository,
    SqlAlchemySprintRepository,
    SqlAlchemyTaskRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    events: DomainEvents
    project_service: ProjectService
    sprint_service: SprintService
    task_service: TaskService
    dashboard_service: DashboardService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "events": self.events,
            "project_service": self.project_service,
            "sprint_service": self.sprint_service,
            "task_service": self.task_service,
            "dashboard_service": self.dashboard_service,
        }

    def close(self) -> None:
        self.dashboard_service.close()
        self.session.close()


def build_service_graph(
    session: Session,
    events: DomainEvents | None = None,
    *,
    today: Callable[[], date] | None = None,
    now: Callable[[], datetime] | None = None,
) -> ServiceGraph:
    """Wire repositories and services around one session and one event bus."""
    events = events or DomainEvents()
    project_repo = SqlAlchemyProjectRepository(session)
    sprint_repo = SqlAlchemySprintRepository(session)
    task_repo = SqlAlchemyTaskRepository(session)

    project_service = ProjectService(
        session,
        project_repo,
        sprint_repo,
        task_repo,
        events=events,
    )
    sprint_service = SprintService(
        session,
        sprint_repo,
        project_repo,
        task_repo,
        events=events,
        clock=today,
    )
    task_service = TaskService(
        session,
        task_repo,
        sprint_repo,
        project_repo,
        events=events,
        clock=now,
    )
    dashboard_service = DashboardService(
        project_service=project_service,
        sprint_service=sprint_service,
        task_service=task_service,
        events=events,
        clock=today,
    )

    return ServiceGraph(
        session=session,
        events=events,
        project_service=project_service,
        sprint_service=sprint_service,
        task_service=task_service,
        dashboard_service=dashboard_service,
    )


def build_service_dict(session: Session, events: DomainEvents | None = None) -> dict[str, Any]:
    return build_service_graph(session, events).as_dict()
