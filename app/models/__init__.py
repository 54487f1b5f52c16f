# Models package
from .user import User, UserRole
from .task import Task, TaskStatus, TaskPriority, task_assignees
from .notification import Notification, NotificationType

__all__ = [
    "User", "UserRole",
    "Task", "TaskStatus", "TaskPriority", "task_assignees",
    "Notification", "NotificationType",
]
