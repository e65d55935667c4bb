"""Tests for implementation service CRUD operations."""

from datetime import date
from decimal import Decimal

import pytest
from sqlmodel import Session

from app.exceptions import NotFoundError, ValidationError
from app.models.billing import ImplementationBilling, ImplementationBillingCreate
from app.models.enums import ImplementationStatus
from app.models.implementation import (
    Implementation,
    ImplementationCreate,
    ImplementationUpdate,
)
from app.models.user import User
from app.services import billing as billing_service
from app.services import implementation as implementation_service

NONEXISTENT_ID = 99999


@pytest.fixture(name="implementation_factory")
def implementation_factory_fixture(session: Session):
    def _create(owner: User, client_name: str = "Client", **overrides) -> Implementation:
        data = {"client_name": client_name, "recurrence_value": Decimal("1200.00")}
        data.update(overrides)
        implementation = implementation_service.create_implementation(
            session, owner.id_user, ImplementationCreate(**data)
        )
        assert implementation.id_implementation is not None
        return implementation

    return _create


class TestCreateImplementation:
    def test_defaults(self, session: Session, user: User, implementation_factory):
        implementation = implementation_factory(user)

        assert implementation.status == ImplementationStatus.ACTIVE
        assert implementation.delivery_completed is False
        assert implementation.recurrence_value == Decimal("1200.00")
        assert implementation.user_id == user.id_user

    def test_end_before_start_rejected(self, session: Session, user: User):
        with pytest.raises(ValidationError) as exc_info:
            implementation_service.create_implementation(
                session,
                user.id_user,
                ImplementationCreate(
                    client_name="Client",
                    recurrence_start_date=date(2024, 5, 1),
                    recurrence_end_date=date(2024, 4, 30),
                ),
            )

        assert exc_info.value.field == "recurrence_end_date"

    def test_same_day_window_allowed(self, session: Session, user: User):
        implementation = implementation_service.create_implementation(
            session,
            user.id_user,
            ImplementationCreate(
                client_name="Client",
                recurrence_start_date=date(2024, 5, 1),
                recurrence_end_date=date(2024, 5, 1),
            ),
        )
        assert implementation.id_implementation is not None


class TestGetImplementations:
    def test_ordered_by_client_and_scoped(
        self, session: Session, user: User, other_user: User, implementation_factory
    ):
        implementation_factory(user, "Zeta")
        implementation_factory(user, "Alpha")
        implementation_factory(other_user, "Beta")

        names = [
            i.client_name
            for i in implementation_service.get_implementations(session, user.id_user)
        ]

        assert names == ["Alpha", "Zeta"]

    def test_filter_by_status(self, session: Session, user: User, implementation_factory):
        implementation_factory(user, "A")
        implementation_factory(user, "B", status=ImplementationStatus.PAUSED)

        paused = implementation_service.get_implementations(
            session, user.id_user, status=ImplementationStatus.PAUSED
        )

        assert [i.client_name for i in paused] == ["B"]

    def test_foreign_implementation_looks_missing(
        self, session: Session, user: User, other_user: User, implementation_factory
    ):
        foreign = implementation_factory(other_user)

        with pytest.raises(NotFoundError):
            implementation_service.get_implementation(
                session, user.id_user, foreign.id_implementation
            )


class TestUpdateImplementation:
    def test_partial_update(self, session: Session, user: User, implementation_factory):
        created = implementation_factory(user)

        updated = implementation_service.update_implementation(
            session,
            user.id_user,
            created.id_implementation,
            ImplementationUpdate(delivery_completed=True),
        )

        assert updated.delivery_completed is True
        assert updated.recurrence_value == Decimal("1200.00")

    def test_window_checked_against_stored_start(
        self, session: Session, user: User, implementation_factory
    ):
        created = implementation_factory(user, recurrence_start_date=date(2024, 3, 1))

        with pytest.raises(ValidationError):
            implementation_service.update_implementation(
                session,
                user.id_user,
                created.id_implementation,
                ImplementationUpdate(recurrence_end_date=date(2024, 2, 1)),
            )

        session.refresh(created)
        assert created.recurrence_end_date is None

    def test_missing_implementation(self, session: Session, user: User):
        with pytest.raises(NotFoundError):
            implementation_service.update_implementation(
                session, user.id_user, NONEXISTENT_ID, ImplementationUpdate()
            )


class TestDeleteImplementation:
    def test_delete_cascades_to_billings(
        self, session: Session, user: User, implementation_factory
    ):
        created = implementation_factory(user)
        billing = billing_service.create_billing(
            session,
            user.id_user,
            created.id_implementation,
            ImplementationBillingCreate(
                billing_date=date(2024, 5, 10), amount=Decimal("1200.00")
            ),
        )

        implementation_service.delete_implementation(
            session, user.id_user, created.id_implementation
        )

        assert session.get(Implementation, created.id_implementation) is None
        assert session.get(ImplementationBilling, billing.id_billing) is None

    def test_cannot_delete_foreign(
        self, session: Session, user: User, other_user: User, implementation_factory
    ):
        foreign = implementation_factory(other_user)

        with pytest.raises(NotFoundError):
            implementation_service.delete_implementation(
                session, user.id_user, foreign.id_implementation
            )

        assert session.get(Implementation, foreign.id_implementation) is not None
