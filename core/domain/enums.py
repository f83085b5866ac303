from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"


class SprintStatus(str, Enum):
    PENDING = "Pendente"
    IN_PROGRESS = "Em andamento"
    DONE = "Concluído"


__all__ = ["ProjectStatus", "TaskStatus", "SprintStatus"]
