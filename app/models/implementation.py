"""Implementation models: client engagements with an optional recurring charge."""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, ForeignKey
from app.core.config import local_now
from app.models.enums import ImplementationStatus

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.billing import ImplementationBilling


class ImplementationBase(SQLModel):
    client_name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=3000)
    recurrence_value: Decimal | None = Field(
        default=None, ge=0, max_digits=12, decimal_places=2
    )
    recurrence_start_date: date | None = None
    recurrence_end_date: date | None = None
    status: ImplementationStatus = Field(
        default=ImplementationStatus.ACTIVE, index=True
    )
    delivery_completed: bool = Field(default=False)


class Implementation(ImplementationBase, table=True):
    id_implementation: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(
            ForeignKey(
                "user.id_user",
                ondelete="CASCADE",
                name="implementation_user_id_fkey",
            ),
            nullable=False,
            index=True,
        )
    )
    created_at: datetime = Field(default_factory=local_now)
    owner: "User" = Relationship(back_populates="implementations")
    billings: list["ImplementationBilling"] = Relationship(
        back_populates="implementation",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class ImplementationCreate(ImplementationBase):
    pass


class ImplementationPublic(ImplementationBase):
    id_implementation: int
    user_id: int
    created_at: datetime


class ImplementationUpdate(SQLModel):
    client_name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=3000)
    recurrence_value: Decimal | None = Field(
        default=None, ge=0, max_digits=12, decimal_places=2
    )
    recurrence_start_date: date | None = None
    recurrence_end_date: date | None = None
    status: ImplementationStatus | None = None
    delivery_completed: bool | None = None


class MonthlyRecurrence(SQLModel):
    """Recurring revenue expected for a single month."""

    month: str  # Format: "YYYY-MM"
    total: Decimal
    implementation_ids: list[int]
