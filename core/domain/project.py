from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import ProjectStatus
from core.domain.identifiers import generate_id


@dataclass
class Project:
    id: str
    name: str
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    # Current projection, rewritten whenever task end dates move.
    actual_expected_end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    health: str = "healthy"
    priority: str = "medium"

    @staticmethod
    def create(name: str, description: str = "", **extra) -> "Project":
        return Project(
            id=generate_id("prj"),
            name=name,
            description=description,
            **extra,
        )


__all__ = ["Project"]
