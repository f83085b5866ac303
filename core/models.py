"""Compatibility re-exports for domain models."""

from core.domain import (
    Project,
    ProjectStatus,
    Sprint,
    SprintStatus,
    Task,
    TaskStatus,
    generate_id,
)

__all__ = [
    "generate_id",
    "Project",
    "ProjectStatus",
    "Sprint",
    "SprintStatus",
    "Task",
    "TaskStatus",
]
