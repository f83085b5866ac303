from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from core.services.dashboard.models import (
    DashboardCalculations,
    DashboardMetrics,
    ScheduleTaskInfo,
)


@dataclass
class DashboardReportContext:
    project_id: str
    project_name: str
    sprint_filter: Optional[str]
    calculations: DashboardCalculations
    metrics: DashboardMetrics
    tasks: List[ScheduleTaskInfo]
    as_of: date

    @property
    def scope_label(self) -> str:
        if not self.sprint_filter:
            return "Sprints em andamento"
        if self.sprint_filter == "all":
            return "Todas as sprints"
        return f"Sprint {self.sprint_filter}"


@dataclass
class ExcelReportContext(DashboardReportContext):
    pass


@dataclass
class PdfReportContext(DashboardReportContext):
    velocity_png_path: str = ""
