"""Notifications table."""
from datetime import datetime
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import joinedload

from .base import BaseRepository
from ..models.notification import Notification
from ..schemas.notification import NotificationRead
from ..schemas.task import TaskBrief


class NotificationRepository(BaseRepository):

    def get(self, notification_id: str) -> Optional[Notification]:
        return self.db.query(Notification).filter(Notification.id == notification_id).first()

    def list_for_user(self, user_id: str) -> List[Notification]:
        return self.db.query(Notification).options(
            joinedload(Notification.task)
        ).filter(
            Notification.user_id == user_id
        ).order_by(desc(Notification.created_at)).all()

    def add_many(self, notifications: List[Notification]) -> List[Notification]:
        self.db.add_all(notifications)
        return notifications

    def mark_all_read(self, user_id: str) -> int:
        """Flip every unread notification of one user. Returns the number of rows changed."""
        return self.db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.read == False  # noqa: E712
        ).update(
            {Notification.read: True, Notification.read_at: datetime.utcnow()},
            synchronize_session=False
        )

    def delete_for_task(self, task_id: str) -> int:
        return self.db.query(Notification).filter(
            Notification.task_id == task_id
        ).delete(synchronize_session=False)

    @staticmethod
    def resolve(notification: Notification) -> NotificationRead:
        """Notification with its task's title attached"""
        task = notification.task
        return NotificationRead(
            id=notification.id,
            type=notification.type,
            task_id=notification.task_id,
            task=TaskBrief(id=task.id, title=task.title) if task else None,
            message=notification.message,
            user_id=notification.user_id,
            read=notification.read,
            read_at=notification.read_at,
            created_at=notification.created_at,
        )
