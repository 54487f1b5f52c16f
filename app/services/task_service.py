"""
Task Service
خدمة المهام

قواعد الصلاحيات:
- أي مستخدم مسجل يمكنه إنشاء مهمة
- المنشئ فقط يمكنه تعديل المهمة بالكامل أو حذفها
- المكلفون فقط يمكنهم تحديث الحالة
- عرض جميع المهام للمدير فقط

Every write and the notifications it produces share one commit.
"""

from datetime import datetime
from typing import List, Sequence
from sqlalchemy.orm import Session

from ..models.task import Task, TaskStatus, TaskPriority
from ..models.user import User
from ..repositories import TaskRepository, UserRepository
from ..schemas.task import TaskCreate, TaskUpdate, TaskRead
from ..utils.db_helpers import guard_storage
from ..utils.exceptions import NotFoundError, ForbiddenError
from ..utils.logging_config import get_logger
from .notification_service import NotificationService

logger = get_logger(__name__)

ASSIGNED_NEW_TASK_MESSAGE = "You have been assigned a new task: {title}"
ASSIGNED_TO_TASK_MESSAGE = "You have been assigned to the task: {title}"


def unique_ids(ids: Sequence[str]) -> List[str]:
    """Drop repeated ids, keeping the first occurrence"""
    return list(dict.fromkeys(ids or []))


class TaskService:

    def __init__(self, db: Session):
        self.db = db
        self.tasks = TaskRepository(db)
        self.users = UserRepository(db)
        self.notifier = NotificationService(db)

    # ======== Helpers ========

    def _load_assignees(self, user_ids: List[str]) -> List[User]:
        users = self.users.get_many(user_ids)
        if len(users) != len(user_ids):
            found = {u.id for u in users}
            missing = [uid for uid in user_ids if uid not in found]
            raise NotFoundError(f"Assigned user not found: {', '.join(missing)}")
        return users

    def _get_task(self, task_id: str) -> Task:
        task = self.tasks.get(task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def _require_creator(self, task: Task, caller: User, action: str) -> None:
        if task.created_by_id != caller.id:
            logger.access_denied("task", task.id, action)
            raise ForbiddenError(f"Not authorized to {action} this task")

    # ======== Queries ========

    @guard_storage("list all tasks")
    def list_all(self, caller: User) -> List[TaskRead]:
        """جميع المهام (للمدير فقط)"""
        if not caller.is_admin:
            logger.access_denied("task", "*", "list_all")
            raise ForbiddenError("Access denied")
        return self.tasks.resolve_all(self.tasks.list_all())

    @guard_storage("list created tasks")
    def list_created_by(self, caller: User) -> List[TaskRead]:
        return self.tasks.resolve_all(self.tasks.list_created_by(caller.id))

    @guard_storage("list assigned tasks")
    def list_assigned_to(self, caller: User) -> List[TaskRead]:
        return self.tasks.resolve_all(self.tasks.list_assigned_to(caller.id))

    # ======== Commands ========

    @guard_storage("create task")
    def create(self, caller: User, data: TaskCreate) -> TaskRead:
        """إنشاء مهمة جديدة وإشعار المكلفين"""
        assignee_ids = unique_ids(data.assigned_to)
        assignees = self._load_assignees(assignee_ids)

        task = Task(
            title=data.title,
            description=data.description,
            status=(data.status or TaskStatus.PENDING).value,
            priority=(data.priority or TaskPriority.MEDIUM).value,
            due_date=data.due_date,
            created_by_id=caller.id,
        )
        task.assignees = assignees
        self.tasks.add(task)
        self.db.flush()

        self.notifier.notify_assigned(
            task,
            assignee_ids,
            ASSIGNED_NEW_TASK_MESSAGE.format(title=task.title),
        )

        self.db.commit()
        self.db.refresh(task)
        logger.task_created(task.id, task.title, len(assignee_ids))
        return self.tasks.resolve(task)

    @guard_storage("update task")
    def update(self, task_id: str, caller: User, data: TaskUpdate) -> TaskRead:
        """تحديث مهمة - الحقول المرسلة فقط"""
        task = self._get_task(task_id)
        self._require_creator(task, caller, "update")

        changes = data.model_dump(exclude_unset=True)
        new_assignee_ids = changes.pop("assigned_to", None)

        added_ids: List[str] = []
        if new_assignee_ids is not None:
            new_assignee_ids = unique_ids(new_assignee_ids)
            assignees = self._load_assignees(new_assignee_ids)
            previous = set(task.assignee_ids)
            added_ids = [uid for uid in new_assignee_ids if uid not in previous]
            task.assignees = assignees

        for field, value in changes.items():
            if isinstance(value, (TaskStatus, TaskPriority)):
                value = value.value
            setattr(task, field, value)
        # onupdate misses edits that only change task_assignees
        task.updated_at = datetime.utcnow()

        self.notifier.notify_assigned(
            task,
            added_ids,
            ASSIGNED_TO_TASK_MESSAGE.format(title=task.title),
        )

        self.db.commit()
        self.db.refresh(task)
        return self.tasks.resolve(task)

    @guard_storage("update task status")
    def update_status(self, task_id: str, caller: User, status: TaskStatus) -> TaskRead:
        """تحديث حالة المهمة (للمكلفين فقط)"""
        task = self._get_task(task_id)
        if not task.is_assigned(caller.id):
            logger.access_denied("task", task.id, "update_status")
            raise ForbiddenError("Not authorized to update this task")

        task.status = status.value
        self.db.commit()
        self.db.refresh(task)
        return self.tasks.resolve(task)

    @guard_storage("delete task")
    def delete(self, task_id: str, caller: User) -> None:
        """حذف مهمة مع إشعاراتها"""
        task = self._get_task(task_id)
        self._require_creator(task, caller, "delete")

        removed = self.notifier.remove_for_task(task.id)
        self.tasks.delete(task)
        self.db.commit()
        logger.task_deleted(task_id, removed)
