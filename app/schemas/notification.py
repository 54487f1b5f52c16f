"""
Schemas للإشعارات
Notification Schemas
"""
from typing import Optional
from datetime import datetime

from .common import CamelModel
from .task import TaskBrief
from ..models.notification import NotificationType


class NotificationRead(CamelModel):
    id: str
    type: NotificationType
    task_id: str
    task: Optional[TaskBrief] = None
    message: str
    user_id: str
    read: bool
    read_at: Optional[datetime] = None
    created_at: datetime
