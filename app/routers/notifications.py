"""
Router للإشعارات - Notifications Router
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.user import User
from ..schemas.common import MessageResponse
from ..schemas.notification import NotificationRead
from ..services.notification_service import NotificationService
from ..utils.dependencies import get_current_user


router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationRead])
@router.get("/", response_model=List[NotificationRead])
def get_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """الحصول على قائمة الإشعارات للمستخدم الحالي"""
    return NotificationService(db).list_for_user(current_user.id)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
@router.patch("/{notification_id}/read/", response_model=NotificationRead)
def mark_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """تحديد إشعار كمقروء"""
    return NotificationService(db).mark_read(notification_id, current_user.id)


@router.post("/mark-all-read", response_model=MessageResponse)
@router.post("/mark-all-read/", response_model=MessageResponse)
def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """تحديد جميع الإشعارات كمقروءة"""
    NotificationService(db).mark_all_read(current_user.id)
    return {"message": "All notifications marked as read"}
