"""Task CRUD scoped to the owning user. Every query filters on user id."""

from sqlalchemy.orm import Session

from app.core.exceptions import ErrorCode, NotFoundError
from app.models import Task
from app.schemas.task import TaskCreateRequest, TaskUpdateRequest


def create_task(db: Session, user_id: int, body: TaskCreateRequest) -> Task:
    task = Task(title=body.title, description=body.description or "", user_id=user_id)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def list_tasks(db: Session, user_id: int, completed: bool | None = None) -> list[Task]:
    """Non-deleted tasks of the user, optionally filtered by completion."""
    query = db.query(Task).filter(Task.user_id == user_id, Task.deleted.is_(False))
    if completed is not None:
        query = query.filter(Task.completed.is_(completed))
    return query.order_by(Task.id).all()


def get_task(db: Session, user_id: int, task_id: int) -> Task:
    task = (
        db.query(Task)
        .filter(Task.id == task_id, Task.user_id == user_id, Task.deleted.is_(False))
        .first()
    )
    if task is None:
        raise NotFoundError("Task does not exists!", ErrorCode.USER_TASK_NOT_FOUND)
    return task


def update_task(db: Session, user_id: int, task_id: int, body: TaskUpdateRequest) -> Task:
    task = get_task(db, user_id, task_id)
    if body.title is not None:
        task.title = body.title
    if body.description is not None:
        task.description = body.description
    db.commit()
    db.refresh(task)
    return task


def complete_task(db: Session, user_id: int, task_id: int) -> Task:
    task = get_task(db, user_id, task_id)
    task.completed = True
    db.commit()
    db.refresh(task)
    return task


def soft_delete_task(db: Session, user_id: int, task_id: int) -> Task:
    task = get_task(db, user_id, task_id)
    task.deleted = True
    db.commit()
    return task
