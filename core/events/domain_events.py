"""Change notifications for projects, sprints and tasks (dashboard refresh)."""
from __future__ import annotations

from core.events.signal import Signal


class DomainEvents:
    """Bundle of signals shared by the services that write and the ones that read."""

    def __init__(self) -> None:
        self.project_changed: Signal[str] = Signal("project_changed")   # project_id
        self.tasks_changed: Signal[str] = Signal("tasks_changed")       # project_id
        self.sprints_changed: Signal[str] = Signal("sprints_changed")   # project_id


# Default instance for callers that do not inject their own bus.
domain_events = DomainEvents()

__all__ = ["DomainEvents", "domain_events"]
