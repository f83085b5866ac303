# infra/db/repositories.py
from __future__ import annotations
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from core.interfaces import ProjectRepository, SprintRepository, TaskRepository
from core.models import Project, Sprint, Task
from infra.db.mappers import (
    project_from_orm,
    project_to_orm,
    sprint_from_orm,
    sprint_to_orm,
    task_from_orm,
    task_to_orm,
)
from infra.db.models import ProjectORM, SprintORM, TaskORM


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def update(self, project: Project) -> None:
        self.session.merge(project_to_orm(project))

    def delete(self, project_id: str) -> None:
        self.session.execute(delete(ProjectORM).where(ProjectORM.id == project_id))

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def list_all(self) -> List[Project]:
        rows = self.session.execute(select(ProjectORM)).scalars().all()
        return [project_from_orm(row) for row in rows]


class SqlAlchemySprintRepository(SprintRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, sprint: Sprint) -> None:
        self.session.add(sprint_to_orm(sprint))

    def update(self, sprint: Sprint) -> None:
        self.session.merge(sprint_to_orm(sprint))

    def delete(self, sprint_id: str) -> None:
        self.session.execute(delete(SprintORM).where(SprintORM.id == sprint_id))

    def get(self, sprint_id: str) -> Optional[Sprint]:
        obj = self.session.get(SprintORM, sprint_id)
        return sprint_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[Sprint]:
        stmt = select(SprintORM).where(SprintORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [sprint_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.execute(delete(SprintORM).where(SprintORM.project_id == project_id))


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def update(self, task: Task) -> None:
        self.session.merge(task_to_orm(task))

    def delete(self, task_id: str) -> None:
        self.session.execute(delete(TaskORM).where(TaskORM.id == task_id))

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[Task]:
        stmt = (
            select(TaskORM)
            .where(TaskORM.project_id == project_id)
            .order_by(TaskORM.created_at, TaskORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.execute(delete(TaskORM).where(TaskORM.project_id == project_id))

    def clear_sprint(self, sprint_id: str) -> None:
        self.session.execute(
            update(TaskORM).where(TaskORM.sprint_id == sprint_id).values(sprint_id=None)
        )


__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemySprintRepository",
    "SqlAlchemyTaskRepository",
]
