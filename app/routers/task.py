"""Task router: the signed-in user's planner."""

from datetime import date
from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.dependencies import CurrentUser
from app.database.database import get_session
from app.models.enums import TaskStatus
from app.models.task import TaskCreate, TaskPublic, TaskUpdate
from app.services import task as task_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=list[TaskPublic])
def list_tasks(
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
    scheduled_date: date | None = None,
    task_status: Annotated[TaskStatus | None, Query(alias="status")] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> list[TaskPublic]:
    """
    List the user's tasks.

    Query parameters:
        `scheduled_date` (YYYY-MM-DD): only tasks planned for that day.
        `status`: `pending` or `completed`.
    """
    tasks = task_service.get_tasks(
        session,
        ensure_id(current_user.id_user, "User"),
        scheduled_date=scheduled_date,
        status=task_status,
        offset=offset,
        limit=limit,
    )
    return [TaskPublic.model_validate(t) for t in tasks]


@router.post("/", response_model=TaskPublic, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> TaskPublic:
    task = task_service.create_task(
        session, ensure_id(current_user.id_user, "User"), task_in
    )
    return TaskPublic.model_validate(task)


@router.get("/{task_id}", response_model=TaskPublic)
def get_task(
    task_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> TaskPublic:
    task = task_service.get_task(
        session, ensure_id(current_user.id_user, "User"), task_id
    )
    return TaskPublic.model_validate(task)


@router.patch("/{task_id}", response_model=TaskPublic)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> TaskPublic:
    """Update a task. Send `{"status": "completed"}` to check it off."""
    task = task_service.update_task(
        session, ensure_id(current_user.id_user, "User"), task_id, task_update
    )
    return TaskPublic.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> None:
    task_service.delete_task(session, ensure_id(current_user.id_user, "User"), task_id)
