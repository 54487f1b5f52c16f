"""Tasks table and the creator/assignee resolution for responses."""
from typing import List, Optional
from sqlalchemy.orm import selectinload

from .base import BaseRepository
from .user_repository import UserRepository
from ..models.task import Task, task_assignees
from ..schemas.task import TaskRead


class TaskRepository(BaseRepository):

    def _query(self):
        return self.db.query(Task).options(
            selectinload(Task.created_by),
            selectinload(Task.assignees),
        )

    def get(self, task_id: str) -> Optional[Task]:
        return self._query().filter(Task.id == task_id).first()

    def list_all(self) -> List[Task]:
        return self._query().order_by(Task.created_at.desc()).all()

    def list_created_by(self, user_id: str) -> List[Task]:
        return self._query().filter(
            Task.created_by_id == user_id
        ).order_by(Task.created_at.desc()).all()

    def list_assigned_to(self, user_id: str) -> List[Task]:
        return self._query().join(
            task_assignees, task_assignees.c.task_id == Task.id
        ).filter(
            task_assignees.c.user_id == user_id
        ).order_by(Task.created_at.desc()).all()

    def add(self, task: Task) -> Task:
        self.db.add(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)

    @staticmethod
    def resolve(task: Task) -> TaskRead:
        """Task with creator and assignees expanded to their display fields"""
        return TaskRead(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            created_by=UserRepository.to_summary(task.created_by) if task.created_by else None,
            assigned_to=[UserRepository.to_summary(u) for u in task.assignees],
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    def resolve_all(self, tasks: List[Task]) -> List[TaskRead]:
        return [self.resolve(t) for t in tasks]
