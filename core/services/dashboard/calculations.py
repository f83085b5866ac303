"""
Dashboard metrics engine.

Pure functions that turn a loaded ``DashboardData`` + ``ProjectInfo`` pair and a
sprint selection into the figures shown on the project dashboard: scope
delivery, team reliability, average lead time, projected end date, project
health and velocity per schedule.

Nothing here performs I/O or raises on incomplete input: missing data, empty
task lists and absent dates all degrade to zero / empty / ``no-date`` results.
"""
from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from typing import Iterable, List, Optional, Protocol, Sequence

from core.models import SprintStatus, TaskStatus
from core.services.dashboard.dates import (
    SECONDS_PER_DAY,
    as_utc,
    days_between,
    round_half_up,
    to_utc_date,
    today_utc,
)
from core.services.dashboard.models import (
    ALL_SPRINTS,
    DashboardCalculations,
    DashboardData,
    EndDateStatus,
    HealthStatus,
    ProjectEndInfo,
    ProjectHealthInfo,
    ProjectInfo,
    ScheduleTaskInfo,
    SelectedSprintData,
    VelocityPoint,
)
from core.services.dashboard.presentation import build_metrics

logger = logging.getLogger(__name__)

NO_DATE_SCORE = 50

_HEALTH_LABELS = {
    HealthStatus.HEALTHY: "Saudável",
    HealthStatus.WARNING: "Moderado",
    HealthStatus.CRITICAL: "Crítico",
}


# --------------------------------------------------------------
# Active tasks
# --------------------------------------------------------------

def is_in_active_sprint_or_no_sprint(task: ScheduleTaskInfo) -> bool:
    if not task.sprint_status:
        return True
    return task.sprint_status == SprintStatus.IN_PROGRESS.value


def get_active_tasks(
    data: Optional[DashboardData],
    sprint_filter: Optional[str] = None,
) -> List[ScheduleTaskInfo]:
    """
    Non-backlog tasks narrowed by the sprint selection:

    - ``"all"``: every non-backlog task, whatever its sprint's status;
    - a sprint name: only tasks of that sprint;
    - unset: tasks with no sprint or whose sprint is in progress.
    """
    if data is None:
        return []
    tasks = [task for task in data.tasks if not task.is_backlog]
    if sprint_filter == ALL_SPRINTS:
        return tasks
    if sprint_filter:
        return [task for task in tasks if task.sprint and task.sprint == sprint_filter]
    return [task for task in tasks if is_in_active_sprint_or_no_sprint(task)]


def _is_completed(task: ScheduleTaskInfo) -> bool:
    return task.status == TaskStatus.COMPLETED.value


def count_completed(tasks: Iterable[ScheduleTaskInfo]) -> int:
    return sum(1 for task in tasks if _is_completed(task))


class HasEndDate(Protocol):
    @property
    def end_date(self) -> Optional[date]: ...


def latest_end_date(tasks: Iterable[HasEndDate]) -> Optional[date]:
    """Latest deadline among the given rows; shared with the project expected-end sync."""
    end_dates = [task.end_date for task in tasks if task.end_date]
    return max(end_dates) if end_dates else None


# --------------------------------------------------------------
# Indicators
# --------------------------------------------------------------

def average_lead_time(active: Sequence[ScheduleTaskInfo]) -> int:
    """Mean days from creation to last update over completed tasks."""
    if not active:
        return 0
    lead_times: List[int] = []
    for task in active:
        if not _is_completed(task):
            continue
        if task.created is None or task.updated is None:
            # No timestamps, nothing to measure.
            continue
        elapsed = (as_utc(task.updated) - as_utc(task.created)).total_seconds()
        lead_times.append(round_half_up(elapsed / SECONDS_PER_DAY))
    if not lead_times:
        return 0
    return round_half_up(sum(lead_times) / len(lead_times))


def _delivered_on_time(
    task: ScheduleTaskInfo,
    project: Optional[ProjectInfo],
    today: date,
) -> bool:
    start = project.start_date if project else None
    end = project.end_date if project else None
    if start is None or end is None:
        return task.on_time is True
    if _is_completed(task):
        if task.updated is None:
            return False
        finished_on = to_utc_date(task.updated)
        return start <= finished_on <= end
    return today <= end


def team_reliability(
    active: Sequence[ScheduleTaskInfo],
    project: Optional[ProjectInfo],
    today: date,
) -> int:
    if not active:
        return 0
    with_deadline = [task for task in active if task.end_date]
    if not with_deadline:
        return 0
    on_time = sum(1 for task in with_deadline if _delivered_on_time(task, project, today))
    return round_half_up(on_time / len(with_deadline) * 100)


def scope_delivery(active: Sequence[ScheduleTaskInfo]) -> int:
    if not active:
        return 0
    return round_half_up(count_completed(active) / len(active) * 100)


def _end_status(days: int) -> EndDateStatus:
    return EndDateStatus.ON_TIME if days >= 0 else EndDateStatus.OVERDUE


def project_end_info(
    active: Sequence[ScheduleTaskInfo],
    project: Optional[ProjectInfo],
    today: date,
) -> ProjectEndInfo:
    """
    Projected end date, resolved in priority order:

    1. committed project end vs. latest task end (positive = ahead of plan);
    2. committed project end vs. today;
    3. no dates at all -> ``no-date``;
    4. latest task end vs. today.
    """
    current_end = latest_end_date(active)
    initial_end = project.end_date if project else None

    if initial_end and current_end:
        diff = days_between(current_end, initial_end)
        return ProjectEndInfo(
            end_date=current_end,
            days_remaining=diff,
            status=_end_status(diff),
            is_before_project_end_date=diff >= 0,
        )

    if initial_end:
        diff = days_between(today, initial_end)
        return ProjectEndInfo(
            end_date=initial_end,
            days_remaining=diff,
            status=_end_status(diff),
            is_before_project_end_date=True,
        )

    if current_end is None:
        return ProjectEndInfo(
            end_date=None,
            days_remaining=None,
            status=EndDateStatus.NO_DATE,
            is_before_project_end_date=False,
        )

    diff = days_between(today, current_end)
    return ProjectEndInfo(
        end_date=current_end,
        days_remaining=diff,
        status=_end_status(diff),
        is_before_project_end_date=False,
    )


def date_prevista_score(end_info: ProjectEndInfo) -> int:
    if end_info.status == EndDateStatus.NO_DATE:
        return NO_DATE_SCORE

    days = end_info.days_remaining
    if end_info.status == EndDateStatus.ON_TIME:
        if days is None or days > 30:
            return 100
        if days > 15:
            return 85
        if days > 7:
            return 70
        if days >= 0:
            return 60
        return 100

    days_overdue = abs(days or 0)
    if days_overdue <= 7:
        return 40
    if days_overdue <= 15:
        return 25
    if days_overdue <= 30:
        return 10
    return 0


def health_status_for(score: int) -> HealthStatus:
    if score >= 75:
        return HealthStatus.HEALTHY
    if score >= 50:
        return HealthStatus.WARNING
    return HealthStatus.CRITICAL


def project_health(
    scope: int,
    reliability: int,
    end_info: ProjectEndInfo,
) -> ProjectHealthInfo:
    date_prevista = date_prevista_score(end_info)
    score = round_half_up((scope + reliability + date_prevista) / 3)
    status = health_status_for(score)
    return ProjectHealthInfo(
        value=_HEALTH_LABELS[status],
        status=status,
        score=score,
        date_prevista=date_prevista,
    )


def unavailable_health() -> ProjectHealthInfo:
    return ProjectHealthInfo(value="N/A", status=HealthStatus.WARNING, score=0)


def velocity_by_schedule(
    data: Optional[DashboardData],
    active: Sequence[ScheduleTaskInfo],
) -> List[VelocityPoint]:
    if data is None or not active:
        return []
    points: List[VelocityPoint] = []
    for schedule in data.schedules:
        in_schedule = [task for task in active if task.schedule_id == schedule.id]
        points.append(
            VelocityPoint(
                schedule=schedule.name,
                created=len(in_schedule),
                completed=count_completed(in_schedule),
                state=schedule.status,
            )
        )
    return points


# --------------------------------------------------------------
# Bundle
# --------------------------------------------------------------

def compute_dashboard(
    data: Optional[DashboardData],
    project: Optional[ProjectInfo],
    sprint_filter: Optional[str] = None,
    selected_sprint: Optional[SelectedSprintData] = None,
    today: Optional[date] = None,
) -> DashboardCalculations:
    """
    Compute every dashboard figure for one selection.

    Results are cached on the full input tuple; all inputs are frozen
    dataclasses, so equal inputs return the very same bundle.
    """
    return _compute_cached(data, project, sprint_filter or None, selected_sprint, today or today_utc())


@lru_cache(maxsize=64)
def _compute_cached(
    data: Optional[DashboardData],
    project: Optional[ProjectInfo],
    sprint_filter: Optional[str],
    selected_sprint: Optional[SelectedSprintData],
    today: date,
) -> DashboardCalculations:
    active = get_active_tasks(data, sprint_filter)
    scope = scope_delivery(active)
    reliability = team_reliability(active, project, today)
    end_info = project_end_info(active, project, today)
    health = project_health(scope, reliability, end_info) if data is not None else unavailable_health()

    logger.debug(
        "Dashboard computed: %d active task(s), scope=%s reliability=%s health=%s",
        len(active),
        scope,
        reliability,
        health.score,
    )
    return DashboardCalculations(
        metrics=tuple(
            build_metrics(
                data,
                active,
                project,
                sprint_filter=sprint_filter,
                selected_sprint=selected_sprint,
                scope=scope,
                reliability=reliability,
                health=health,
                end_info=end_info,
            )
        ),
        velocity_data=tuple(velocity_by_schedule(data, active)),
        average_lead_time=average_lead_time(active),
        team_reliability=reliability,
        scope_delivery=scope,
        project_health=health,
        project_end_info=end_info,
    )


def clear_dashboard_cache() -> None:
    _compute_cached.cache_clear()


__all__ = [
    "ALL_SPRINTS",
    "is_in_active_sprint_or_no_sprint",
    "get_active_tasks",
    "count_completed",
    "latest_end_date",
    "average_lead_time",
    "team_reliability",
    "scope_delivery",
    "project_end_info",
    "date_prevista_score",
    "health_status_for",
    "project_health",
    "velocity_by_schedule",
    "compute_dashboard",
    "clear_dashboard_cache",
]
