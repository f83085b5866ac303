from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from core.services.dashboard.dates import parse_date, parse_datetime


ALL_SPRINTS = "all"


class EndDateStatus(str, Enum):
    ON_TIME = "on-time"
    OVERDUE = "overdue"
    NO_DATE = "no-date"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


def _status_code(raw: Any) -> str:
    # The API sends either a plain code or the status row ({"code": ...}).
    if isinstance(raw, Mapping):
        return str(raw.get("code") or "")
    return str(raw or "")


def _name_of(raw: Any) -> Optional[str]:
    if isinstance(raw, Mapping):
        return raw.get("name")
    return raw or None


def _freeze(instance: Any, *names: str) -> None:
    for name in names:
        value = getattr(instance, name)
        if not isinstance(value, tuple):
            object.__setattr__(instance, name, tuple(value or ()))


@dataclass(frozen=True)
class ScheduleTaskInfo:
    id: Any
    title: str
    status: str
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sprint: Optional[str] = None
    sprint_status: Optional[str] = None
    schedule_id: Any = None
    schedule_name: str = ""
    is_backlog: bool = False
    on_time: Optional[bool] = None
    assignee: Optional[str] = None
    description: str = ""
    priority: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ScheduleTaskInfo":
        """Build from the camelCase task rows returned by the REST API."""
        sprint = payload.get("sprint")
        sprint_status = payload.get("sprintStatus")
        if isinstance(sprint, Mapping):
            sprint_status = sprint_status or _name_of(sprint.get("statusSprint"))
        return cls(
            id=payload.get("id"),
            title=payload.get("title") or "",
            status=_status_code(payload.get("status")),
            estimated_hours=float(payload.get("estimatedHours") or 0.0),
            actual_hours=float(payload.get("actualHours") or 0.0),
            created=parse_datetime(payload.get("created", payload.get("createdAt"))),
            updated=parse_datetime(payload.get("updated", payload.get("updatedAt"))),
            start_date=parse_date(payload.get("startDate")),
            end_date=parse_date(payload.get("endDate")),
            sprint=_name_of(sprint),
            sprint_status=sprint_status or None,
            schedule_id=payload.get("scheduleId"),
            schedule_name=payload.get("scheduleName") or "",
            is_backlog=bool(payload.get("isBacklog") or False),
            on_time=payload.get("onTime"),
            assignee=_name_of(payload.get("assignee")),
            description=payload.get("description") or "",
            priority=payload.get("priority"),
        )


@dataclass(frozen=True)
class ScheduleInfo:
    id: Any
    name: str
    status: str
    description: str = ""
    start_date: Optional[date] = None
    expected_end_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    total_tasks: int = 0
    completed_tasks: int = 0
    total_estimated_hours: float = 0.0
    total_actual_hours: float = 0.0


@dataclass(frozen=True)
class DashboardProject:
    id: Any
    name: str
    description: str = ""


@dataclass(frozen=True)
class DashboardMetrics:
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    todo_tasks: int = 0
    blocked_tasks: int = 0
    cancelled_tasks: int = 0
    total_estimated_hours: float = 0.0
    total_actual_hours: float = 0.0
    completion_rate: int = 0
    hours_completion_rate: int = 0
    on_time_delivery_rate: int = 0
    overdue_tasks: int = 0
    recent_completed_tasks: int = 0
    total_schedules: int = 0
    active_schedules: int = 0

    @property
    def status_distribution(self) -> dict[str, int]:
        return {
            "todo": self.todo_tasks,
            "in_progress": self.in_progress_tasks,
            "completed": self.completed_tasks,
            "blocked": self.blocked_tasks,
            "cancelled": self.cancelled_tasks,
        }


@dataclass(frozen=True)
class DashboardData:
    project: DashboardProject
    schedules: Tuple[ScheduleInfo, ...] = ()
    tasks: Tuple[ScheduleTaskInfo, ...] = ()
    metrics: DashboardMetrics = field(default_factory=DashboardMetrics)

    def __post_init__(self) -> None:
        _freeze(self, "schedules", "tasks")


@dataclass(frozen=True)
class ProjectInfo:
    id: Any
    name: str
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    actual_expected_end_date: Optional[date] = None
    status: str = "active"
    health: str = "healthy"
    priority: str = "medium"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ProjectInfo":
        return cls(
            id=payload.get("id"),
            name=payload.get("name") or "",
            description=payload.get("description") or "",
            start_date=parse_date(payload.get("startDate")),
            end_date=parse_date(payload.get("endDate")),
            actual_expected_end_date=parse_date(payload.get("actualExpectedEndDate")),
            status=payload.get("status") or "active",
            health=payload.get("health") or "healthy",
            priority=payload.get("priority") or "medium",
        )


@dataclass(frozen=True)
class ProjectOption:
    id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class SelectedSprintData:
    expect_date: Optional[date] = None
    expect_end_date: Optional[date] = None

    @property
    def has_period(self) -> bool:
        return self.expect_date is not None and self.expect_end_date is not None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SelectedSprintData":
        return cls(
            expect_date=parse_date(payload.get("expectDate")),
            expect_end_date=parse_date(payload.get("expectEndDate")),
        )


@dataclass(frozen=True)
class Metric:
    label: str
    value: str
    unit: str = ""
    additional_info: str = ""
    tooltip: str = ""
    trend: Optional[str] = None
    status: Optional[str] = None
    custom_status: Optional[str] = None


@dataclass(frozen=True)
class ProjectEndInfo:
    end_date: Optional[date]
    days_remaining: Optional[int]
    status: EndDateStatus
    is_before_project_end_date: bool


@dataclass(frozen=True)
class ProjectHealthInfo:
    value: str
    status: HealthStatus
    score: int
    date_prevista: Optional[int] = None


@dataclass(frozen=True)
class VelocityPoint:
    schedule: str
    created: int
    completed: int
    state: str


@dataclass(frozen=True)
class DashboardCalculations:
    metrics: Tuple[Metric, ...]
    velocity_data: Tuple[VelocityPoint, ...]
    average_lead_time: int
    team_reliability: int
    scope_delivery: int
    project_health: ProjectHealthInfo
    project_end_info: ProjectEndInfo

    def __post_init__(self) -> None:
        _freeze(self, "metrics", "velocity_data")

    def as_dict(self) -> dict[str, Any]:
        """Plain JSON-friendly view (enums as values, dates as ISO strings)."""

        def _plain(value: Any) -> Any:
            if isinstance(value, Enum):
                return value.value
            if isinstance(value, (date, datetime)):
                return value.isoformat()
            if isinstance(value, dict):
                return {key: _plain(item) for key, item in value.items()}
            if isinstance(value, (list, tuple)):
                return [_plain(item) for item in value]
            return value

        return _plain(asdict(self))


__all__ = [
    "ALL_SPRINTS",
    "EndDateStatus",
    "HealthStatus",
    "ScheduleTaskInfo",
    "ScheduleInfo",
    "DashboardProject",
    "DashboardMetrics",
    "DashboardData",
    "ProjectInfo",
    "ProjectOption",
    "SelectedSprintData",
    "Metric",
    "ProjectEndInfo",
    "ProjectHealthInfo",
    "VelocityPoint",
    "DashboardCalculations",
]
