from __future__ import annotations

from datetime import date
from typing import List

from core.interfaces import TaskRepository
from core.models import Task, TaskStatus


class TaskQueryMixin:
    _task_repo: TaskRepository

    def get_task(self, task_id: str) -> Task | None:
        return self._task_repo.get(task_id)

    def list_tasks_for_project(self, project_id: str) -> List[Task]:
        return self._task_repo.list_by_project(project_id)

    def list_backlog(self, project_id: str) -> List[Task]:
        return [task for task in self._task_repo.list_by_project(project_id) if task.is_backlog]

    def list_tasks_for_sprint(self, project_id: str, sprint_id: str) -> List[Task]:
        return [task for task in self._task_repo.list_by_project(project_id) if task.sprint_id == sprint_id]

    def query_tasks(
        self,
        project_id: str,
        status: TaskStatus | None = None,
        assignee: str | None = None,
        end_from: date | None = None,
        end_to: date | None = None,
        include_backlog: bool = True,
    ) -> List[Task]:
        tasks = self._task_repo.list_by_project(project_id)

        if not include_backlog:
            tasks = [t for t in tasks if not t.is_backlog]
        if status:
            tasks = [t for t in tasks if t.status == status]
        if assignee:
            tasks = [t for t in tasks if (t.assignee or "").lower() == assignee.lower()]
        if end_from:
            tasks = [t for t in tasks if t.end_date and t.end_date >= end_from]
        if end_to:
            tasks = [t for t in tasks if t.end_date and t.end_date <= end_to]
        return tasks


__all__ = ["TaskQueryMixin"]
