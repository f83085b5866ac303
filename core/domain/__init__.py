from core.domain.enums import ProjectStatus, SprintStatus, TaskStatus
from core.domain.identifiers import generate_id
from core.domain.project import Project
from core.domain.sprint import Sprint
from core.domain.task import Task

__all__ = [
    "generate_id",
    "ProjectStatus",
    "SprintStatus",
    "TaskStatus",
    "Project",
    "Sprint",
    "Task",
]
