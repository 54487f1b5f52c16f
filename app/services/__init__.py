# Services package
from .notification_service import NotificationService
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "NotificationService",
    "TaskService",
    "UserService",
]
