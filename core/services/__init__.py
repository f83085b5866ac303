from .dashboard import DashboardService
from .project import ProjectService
from .sprint import SprintService
from .task import TaskService

__all__ = [
    "ProjectService",
    "SprintService",
    "TaskService",
    "DashboardService",
]
