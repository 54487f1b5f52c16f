"""
نظام الإشعارات
Notifications System
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base


class NotificationType(str, enum.Enum):
    """أنواع الإشعارات"""
    TASK_ASSIGNED = "task_assigned"
    # Declared for clients; no operation emits it yet
    TASK_UPDATED = "task_updated"


class Notification(Base):
    """جدول الإشعارات"""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # المستخدم المستهدف
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # المهمة المرتبطة
    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)

    # حالة القراءة
    read = Column(Boolean, default=False, nullable=False, index=True)
    read_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # العلاقات
    user = relationship("User", foreign_keys=[user_id])
    task = relationship("Task", back_populates="notifications")

    def __repr__(self):
        return f"<Notification {self.type} -> {self.user_id}>"

    def mark_as_read(self):
        """تحديد الإشعار كمقروء"""
        if not self.read:
            self.read = True
            self.read_at = datetime.utcnow()
