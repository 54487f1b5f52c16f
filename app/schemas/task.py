"""
Schemas للمهام
Task Schemas
"""
from pydantic import Field, field_validator
from typing import Optional, List
from datetime import date, datetime

from .common import CamelModel
from .user import UserSummary
from ..models.task import TaskStatus, TaskPriority


class TaskCreate(CamelModel):
    """إنشاء مهمة جديدة"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    assigned_to: Optional[List[str]] = None


class TaskUpdate(CamelModel):
    """
    تحديث مهمة
    Only keys present in the request body are applied.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    assigned_to: Optional[List[str]] = None

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class TaskStatusUpdate(CamelModel):
    """تحديث حالة المهمة"""
    status: TaskStatus


class TaskBrief(CamelModel):
    id: str
    title: str


class TaskRead(CamelModel):
    """استجابة المهمة مع المنشئ والمكلفين"""
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date] = None
    created_by: Optional[UserSummary] = None
    assigned_to: List[UserSummary] = []
    created_at: datetime
    updated_at: Optional[datetime] = None
