"""Task service module for owner-scoped CRUD operations."""

from datetime import date
from sqlmodel import Session, select

from app.core.ownership import ensure_owned
from app.models.enums import TaskStatus
from app.models.task import Task, TaskCreate, TaskUpdate
from app.utils.validation import reject_nulls

REQUIRED_ON_UPDATE = ("title", "scheduled_date", "status")


def get_tasks(
    session: Session,
    user_id: int,
    *,
    scheduled_date: date | None = None,
    status: TaskStatus | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[Task]:
    """
    Retrieve a user's tasks, optionally filtered by day and status.

    Parameters:
        session: Database session.
        user_id: Owner of the tasks.
        scheduled_date: Only tasks scheduled for this day.
        status: Only tasks in this status.
        offset: Number of records to skip.
        limit: Maximum number of records to return.

    Returns:
        list[Task]: Matching tasks ordered by scheduled date, then creation.
    """
    statement = select(Task).where(Task.user_id == user_id)
    if scheduled_date is not None:
        statement = statement.where(Task.scheduled_date == scheduled_date)
    if status is not None:
        statement = statement.where(Task.status == status)
    statement = (
        statement.order_by(Task.scheduled_date, Task.id_task)  # type: ignore
        .offset(offset)
        .limit(limit)
    )
    return list(session.exec(statement).all())


def get_task(session: Session, user_id: int, task_id: int) -> Task:
    """
    Retrieve one of the user's tasks.

    Raises:
        NotFoundError: If the task doesn't exist or belongs to another user.
    """
    return ensure_owned(session.get(Task, task_id), user_id, "Task", task_id)


def create_task(session: Session, user_id: int, task_in: TaskCreate) -> Task:
    """
    Create a task owned by `user_id`.

    Returns:
        Task: The created task.
    """
    task = Task.model_validate(task_in, update={"user_id": user_id})
    session.add(task)
    session.commit()
    session.refresh(task)
    return task


def update_task(
    session: Session, user_id: int, task_id: int, task_update: TaskUpdate
) -> Task:
    """
    Update a task; marking it completed is a status change like any other.

    Raises:
        NotFoundError: If the task doesn't exist or belongs to another user.
        ValidationError: If title, date or status is set to null.
    """
    task = get_task(session, user_id, task_id)

    update_data = task_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, REQUIRED_ON_UPDATE)
    for key, value in update_data.items():
        setattr(task, key, value)

    session.add(task)
    session.commit()
    session.refresh(task)
    return task


def delete_task(session: Session, user_id: int, task_id: int) -> None:
    """
    Delete a task.

    Raises:
        NotFoundError: If the task doesn't exist or belongs to another user.
    """
    task = get_task(session, user_id, task_id)
    session.delete(task)
    session.commit()
