"""
API للمهام
Tasks API
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.user import User
from ..schemas.common import MessageResponse
from ..schemas.task import TaskCreate, TaskUpdate, TaskStatusUpdate, TaskRead
from ..services.task_service import TaskService
from ..utils.dependencies import get_current_user

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=List[TaskRead])
@router.get("/", response_model=List[TaskRead])
def get_all_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """جميع المهام (للمدير فقط)"""
    return TaskService(db).list_all(current_user)


@router.get("/created", response_model=List[TaskRead])
@router.get("/created/", response_model=List[TaskRead])
def get_created_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """المهام التي أنشأها المستخدم الحالي"""
    return TaskService(db).list_created_by(current_user)


@router.get("/assigned", response_model=List[TaskRead])
@router.get("/assigned/", response_model=List[TaskRead])
def get_assigned_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """المهام المكلف بها المستخدم الحالي"""
    return TaskService(db).list_assigned_to(current_user)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """إنشاء مهمة جديدة"""
    return TaskService(db).create(current_user, task_data)


@router.put("/{task_id}", response_model=TaskRead)
@router.put("/{task_id}/", response_model=TaskRead)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """تحديث مهمة (للمنشئ فقط)"""
    return TaskService(db).update(task_id, current_user, task_data)


@router.patch("/{task_id}/status", response_model=TaskRead)
@router.patch("/{task_id}/status/", response_model=TaskRead)
def update_task_status(
    task_id: str,
    status_data: TaskStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """تحديث حالة المهمة (للمكلفين فقط)"""
    return TaskService(db).update_status(task_id, current_user, status_data.status)


@router.delete("/{task_id}", response_model=MessageResponse)
@router.delete("/{task_id}/", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """حذف مهمة (للمنشئ فقط)"""
    TaskService(db).delete(task_id, current_user)
    return {"message": "Task deleted"}
