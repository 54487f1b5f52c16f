"""
نظام المهام
Tasks with a creator and a set of assignees
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
import enum
from ..database import Base


class TaskStatus(str, enum.Enum):
    """حالة المهمة"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    """أولوية المهمة"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


task_assignees = Table(
    "task_assignees",
    Base.metadata,
    Column("task_id", String(36), ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class Task(Base):
    """
    المهام
    Tasks created by one user and assigned to any number of users
    """
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    due_date = Column(Date, nullable=True)

    # من أنشأ المهمة - لا يتغير بعد الإنشاء
    created_by_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    created_by = relationship("User", foreign_keys=[created_by_id])
    assignees = relationship("User", secondary=task_assignees, lazy="selectin")
    # Removed explicitly by TaskService.delete; the FK also cascades at the database
    notifications = relationship(
        "Notification",
        back_populates="task",
        passive_deletes=True,
    )

    @property
    def assignee_ids(self) -> list:
        return [user.id for user in self.assignees]

    def is_assigned(self, user_id: str) -> bool:
        return user_id in self.assignee_ids

    def __repr__(self):
        return f"<Task {self.title} - {self.status}>"
