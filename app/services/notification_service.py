"""
Notification Service
خدمة الإشعارات

Notifications are only ever created as a side effect of task assignment and
only ever mutated to flip ``read``. The task service calls
``notify_assigned`` inside its own unit of work; nothing here is reachable
over HTTP for creating rows.
"""

import logging
from typing import Iterable, List
from sqlalchemy.orm import Session

from ..models.notification import Notification, NotificationType
from ..models.task import Task
from ..repositories import NotificationRepository
from ..schemas.notification import NotificationRead
from ..utils.db_helpers import guard_storage
from ..utils.exceptions import NotFoundError, ForbiddenError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class NotificationService:

    def __init__(self, db: Session):
        self.db = db
        self.notifications = NotificationRepository(db)

    @guard_storage("list notifications")
    def list_for_user(self, user_id: str) -> List[NotificationRead]:
        """الإشعارات الخاصة بالمستخدم، الأحدث أولاً"""
        rows = self.notifications.list_for_user(user_id)
        return [self.notifications.resolve(n) for n in rows]

    @guard_storage("mark notification read")
    def mark_read(self, notification_id: str, user_id: str) -> NotificationRead:
        """تحديد الإشعار كمقروء"""
        notification = self.notifications.get(notification_id)
        if not notification:
            raise NotFoundError("Notification not found")

        if notification.user_id != user_id:
            logger.access_denied("notification", notification_id, "mark_read")
            raise ForbiddenError("Not authorized")

        notification.mark_as_read()
        self.db.commit()
        self.db.refresh(notification)
        return self.notifications.resolve(notification)

    @guard_storage("mark all notifications read")
    def mark_all_read(self, user_id: str) -> int:
        """تحديد جميع الإشعارات كمقروءة"""
        updated = self.notifications.mark_all_read(user_id)
        self.db.commit()
        logger.info(f"Marked {updated} notifications read for user {user_id}")
        return updated

    def notify_assigned(self, task: Task, user_ids: Iterable[str], message: str) -> List[Notification]:
        """
        Queue one task_assigned notification per recipient.

        Rows are added to the caller's session but not committed, so they land
        in the same transaction as the task write that produced them.
        """
        notifications = [
            Notification(
                type=NotificationType.TASK_ASSIGNED.value,
                task_id=task.id,
                message=message,
                user_id=user_id,
            )
            for user_id in user_ids
        ]
        if notifications:
            self.notifications.add_many(notifications)
            logger.log_with_context(
                logging.INFO,
                f"Queued {len(notifications)} assignment notifications",
                entity_type="task",
                entity_id=task.id,
                recipients=[n.user_id for n in notifications],
            )
        return notifications

    def remove_for_task(self, task_id: str) -> int:
        """Delete every notification of a task, inside the caller's transaction"""
        return self.notifications.delete_for_task(task_id)
