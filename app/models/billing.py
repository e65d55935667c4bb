"""Billing records tracking each recurring charge of an implementation."""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, ForeignKey
from app.core.config import local_now

if TYPE_CHECKING:
    from app.models.implementation import Implementation


class ImplementationBillingBase(SQLModel):
    billing_date: date
    amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    is_paid: bool = Field(default=False)
    notes: str | None = Field(default=None, max_length=1000)


class ImplementationBilling(ImplementationBillingBase, table=True):
    __tablename__ = "implementation_billing"  # type: ignore

    id_billing: int | None = Field(default=None, primary_key=True)
    implementation_id: int = Field(
        sa_column=Column(
            ForeignKey(
                "implementation.id_implementation",
                ondelete="CASCADE",
                name="implementation_billing_implementation_id_fkey",
            ),
            nullable=False,
            index=True,
        )
    )
    paid_at: datetime | None = None
    created_at: datetime = Field(default_factory=local_now)
    implementation: "Implementation" = Relationship(back_populates="billings")


class ImplementationBillingCreate(ImplementationBillingBase):
    pass


class ImplementationBillingPublic(ImplementationBillingBase):
    id_billing: int
    implementation_id: int
    paid_at: datetime | None
    created_at: datetime


class ImplementationBillingUpdate(SQLModel):
    billing_date: date | None = None
    amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    is_paid: bool | None = None
    notes: str | None = Field(default=None, max_length=1000)
