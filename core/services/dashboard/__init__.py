from .calculations import clear_dashboard_cache, compute_dashboard, get_active_tasks
from .models import (
    ALL_SPRINTS,
    DashboardCalculations,
    DashboardData,
    DashboardMetrics,
    EndDateStatus,
    HealthStatus,
    Metric,
    ProjectEndInfo,
    ProjectHealthInfo,
    ProjectInfo,
    ScheduleInfo,
    ScheduleTaskInfo,
    SelectedSprintData,
    VelocityPoint,
)
from .service import DashboardService
from .sprints import SprintOption

__all__ = [
    "ALL_SPRINTS",
    "DashboardService",
    "DashboardCalculations",
    "DashboardData",
    "DashboardMetrics",
    "EndDateStatus",
    "HealthStatus",
    "Metric",
    "ProjectEndInfo",
    "ProjectHealthInfo",
    "ProjectInfo",
    "ScheduleInfo",
    "ScheduleTaskInfo",
    "SelectedSprintData",
    "SprintOption",
    "VelocityPoint",
    "clear_dashboard_cache",
    "compute_dashboard",
    "get_active_tasks",
]
