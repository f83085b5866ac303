# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import Project, Sprint, Task


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def update(self, project: Project) -> None: ...

    @abstractmethod
    def delete(self, project_id: str) -> None: ...

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def list_all(self) -> List[Project]: ...


class SprintRepository(ABC):
    @abstractmethod
    def add(self, sprint: Sprint) -> None: ...

    @abstractmethod
    def update(self, sprint: Sprint) -> None: ...

    @abstractmethod
    def delete(self, sprint_id: str) -> None: ...

    @abstractmethod
    def get(self, sprint_id: str) -> Optional[Sprint]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Sprint]: ...

    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...


class TaskRepository(ABC):
    @abstractmethod
    def add(self, task: Task) -> None: ...

    @abstractmethod
    def update(self, task: Task) -> None: ...

    @abstractmethod
    def delete(self, task_id: str) -> None: ...

    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Task]: ...

    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...

    @abstractmethod
    def clear_sprint(self, sprint_id: str) -> None: ...


__all__ = ["ProjectRepository", "SprintRepository", "TaskRepository"]
