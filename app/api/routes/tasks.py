"""Task routes for the authenticated user's own tasks."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.routes.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import AuthContext
from app.schemas.task import (
    TaskCreateRequest,
    TaskListResponse,
    TaskMessageResponse,
    TaskOut,
    TaskResponse,
    TaskUpdateRequest,
)
from app.services import tasks as task_service

router = APIRouter()


def _task_list(tasks) -> TaskListResponse:
    return TaskListResponse(data=[TaskOut.model_validate(t) for t in tasks])


@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreateRequest,
    user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskResponse:
    task = task_service.create_task(db, user.user_id, body)
    return TaskResponse(data=TaskOut.model_validate(task))


@router.get("/", response_model=TaskListResponse)
def list_tasks(
    user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskListResponse:
    return _task_list(task_service.list_tasks(db, user.user_id))


# Declared before /{task_id} so "task" is not parsed as an id.
@router.get("/task", response_model=TaskListResponse)
def filter_tasks(
    user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    completed: bool = False,
) -> TaskListResponse:
    """Tasks by completion: ?completed=true for done tasks, open ones by default."""
    return _task_list(task_service.list_tasks(db, user.user_id, completed=completed))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskResponse:
    task = task_service.get_task(db, user.user_id, task_id)
    return TaskResponse(data=TaskOut.model_validate(task))


@router.patch(
    "/{task_id}/complete",
    response_model=TaskMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def complete_task(
    task_id: int,
    user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskMessageResponse:
    task_service.complete_task(db, user.user_id, task_id)
    return TaskMessageResponse(message="Task has been completed")


@router.patch("/{task_id}", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskResponse:
    task = task_service.update_task(db, user.user_id, task_id, body)
    return TaskResponse(data=TaskOut.model_validate(task))


@router.delete(
    "/{task_id}", response_model=TaskMessageResponse, status_code=status.HTTP_201_CREATED
)
def delete_task(
    task_id: int,
    user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskMessageResponse:
    task_service.soft_delete_task(db, user.user_id, task_id)
    return TaskMessageResponse(message="Task has been deleted")
