from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from core.models import TaskStatus
from core.services.dashboard.calculations import is_in_active_sprint_or_no_sprint
from core.services.dashboard.dates import round_half_up, to_utc_date
from core.services.dashboard.models import DashboardMetrics, ScheduleInfo, ScheduleTaskInfo

RECENT_COMPLETION_WINDOW_DAYS = 7


def precompute_on_time(
    status: str,
    end_date: Optional[date],
    updated: Optional[datetime],
    today: date,
) -> Optional[bool]:
    """On-time flag carried by each task row; None when the task has no deadline."""
    if end_date is None:
        return None
    if status == TaskStatus.COMPLETED.value:
        if updated is None:
            return None
        return to_utc_date(updated) <= end_date
    return today <= end_date


def _rate(part: float, whole: float) -> int:
    return round_half_up(part / whole * 100) if whole > 0 else 0


def calculate_metrics(
    tasks: Sequence[ScheduleTaskInfo],
    schedules: Sequence[ScheduleInfo],
    today: date,
) -> DashboardMetrics:
    """Headline counters over the current work (non-backlog, active sprint or none)."""
    active = [t for t in tasks if not t.is_backlog and is_in_active_sprint_or_no_sprint(t)]

    def _count(status: str) -> int:
        return sum(1 for t in active if t.status == status)

    total = len(active)
    completed = _count(TaskStatus.COMPLETED.value)
    estimated = sum(t.estimated_hours for t in active)
    actual = sum(t.actual_hours for t in active)

    with_deadline = [t for t in active if t.end_date and t.on_time is not None]
    on_time = sum(1 for t in with_deadline if t.on_time is True)

    overdue = sum(
        1
        for t in active
        if t.end_date and t.status != TaskStatus.COMPLETED.value and t.end_date < today
    )

    recent_threshold = today - timedelta(days=RECENT_COMPLETION_WINDOW_DAYS)
    recent_completed = sum(
        1
        for t in active
        if t.status == TaskStatus.COMPLETED.value
        and t.updated is not None
        and to_utc_date(t.updated) >= recent_threshold
    )

    return DashboardMetrics(
        total_tasks=total,
        completed_tasks=completed,
        in_progress_tasks=_count(TaskStatus.IN_PROGRESS.value),
        todo_tasks=_count(TaskStatus.TODO.value),
        blocked_tasks=_count(TaskStatus.BLOCKED.value),
        cancelled_tasks=_count("cancelled"),
        total_estimated_hours=estimated,
        total_actual_hours=actual,
        completion_rate=_rate(completed, total),
        hours_completion_rate=_rate(actual, estimated),
        on_time_delivery_rate=_rate(on_time, len(with_deadline)),
        overdue_tasks=overdue,
        recent_completed_tasks=recent_completed,
        total_schedules=len(schedules),
        active_schedules=sum(1 for s in schedules if s.status == "active"),
    )


__all__ = ["RECENT_COMPLETION_WINDOW_DAYS", "precompute_on_time", "calculate_metrics"]
