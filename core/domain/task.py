from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from core.domain.enums import TaskStatus
from core.domain.identifiers import generate_id


@dataclass
class Task:
    id: str
    project_id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    assignee: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sprint_id: Optional[str] = None
    is_backlog: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def create(project_id: str, title: str, description: str = "", **extra) -> "Task":
        return Task(
            id=generate_id("tsk"),
            project_id=project_id,
            title=title,
            description=description,
            **extra,
        )


__all__ = ["Task"]
