from datetime import datetime
from typing import TYPE_CHECKING
from pydantic import EmailStr
from sqlmodel import SQLModel, Field, Relationship
from app.core.config import local_now

if TYPE_CHECKING:
    from app.models.task import Task
    from app.models.prospect import Prospect
    from app.models.implementation import Implementation


class UserBase(SQLModel):
    email: str = Field(unique=True, index=True, max_length=255)
    full_name: str | None = Field(default=None, max_length=100)


class User(UserBase, table=True):
    id_user: int | None = Field(default=None, primary_key=True)
    hashed_password: str
    date_creation: datetime = Field(default_factory=local_now)
    tasks: list["Task"] = Relationship(
        back_populates="owner", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    prospects: list["Prospect"] = Relationship(
        back_populates="owner", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    implementations: list["Implementation"] = Relationship(
        back_populates="owner", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


class UserCreate(SQLModel):
    email: EmailStr
    full_name: str | None = Field(default=None, max_length=100)
    # Same minimum as the login form
    password: str = Field(min_length=6)


class UserPublic(UserBase):
    id_user: int
    date_creation: datetime


class UserUpdate(SQLModel):
    full_name: str | None = Field(default=None, max_length=100)
    password: str | None = Field(default=None, min_length=6)
