# Repositories package
from .base import BaseRepository
from .user_repository import UserRepository
from .task_repository import TaskRepository
from .notification_repository import NotificationRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "TaskRepository",
    "NotificationRepository",
]
