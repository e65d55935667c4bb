"""Prospect (sales lead) models."""

from datetime import datetime
from typing import TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, ForeignKey
from app.core.config import local_now
from app.models.enums import ProspectStatus

if TYPE_CHECKING:
    from app.models.user import User


class ProspectBase(SQLModel):
    name: str = Field(max_length=100)
    company: str | None = Field(default=None, max_length=100)
    contact: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=3000)
    status: ProspectStatus = Field(default=ProspectStatus.NEW, index=True)


class Prospect(ProspectBase, table=True):
    id_prospect: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(
            ForeignKey(
                "user.id_user", ondelete="CASCADE", name="prospect_user_id_fkey"
            ),
            nullable=False,
            index=True,
        )
    )
    created_at: datetime = Field(default_factory=local_now, index=True)
    owner: "User" = Relationship(back_populates="prospects")


class ProspectCreate(ProspectBase):
    pass


class ProspectPublic(ProspectBase):
    id_prospect: int
    user_id: int
    created_at: datetime


class ProspectUpdate(SQLModel):
    name: str | None = Field(default=None, max_length=100)
    company: str | None = Field(default=None, max_length=100)
    contact: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=3000)
    status: ProspectStatus | None = None
