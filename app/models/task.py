"""Task models for the daily/weekly planner."""

from datetime import date, datetime
from typing import TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, ForeignKey
from app.core.config import local_now
from app.models.enums import TaskStatus

if TYPE_CHECKING:
    from app.models.user import User


class TaskBase(SQLModel):
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=3000)
    scheduled_date: date = Field(index=True)
    status: TaskStatus = Field(default=TaskStatus.PENDING, index=True)


class Task(TaskBase, table=True):
    id_task: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(
            ForeignKey("user.id_user", ondelete="CASCADE", name="task_user_id_fkey"),
            nullable=False,
            index=True,
        )
    )
    created_at: datetime = Field(default_factory=local_now)
    owner: "User" = Relationship(back_populates="tasks")


class TaskCreate(TaskBase):
    pass


class TaskPublic(TaskBase):
    id_task: int
    user_id: int
    created_at: datetime


class TaskUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=3000)
    scheduled_date: date | None = None
    status: TaskStatus | None = None
