from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import SprintStatus
from core.domain.identifiers import generate_id


@dataclass
class Sprint:
    id: str
    project_id: str
    name: str
    expect_date: Optional[date] = None
    expect_end_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: SprintStatus = SprintStatus.PENDING

    @staticmethod
    def create(project_id: str, name: str, **extra) -> "Sprint":
        return Sprint(
            id=generate_id("spr"),
            project_id=project_id,
            name=name,
            **extra,
        )


__all__ = ["Sprint"]
