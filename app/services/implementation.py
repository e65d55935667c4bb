"""Implementation service module for owner-scoped CRUD operations."""

from datetime import date
from sqlmodel import Session, select

from app.core.ownership import ensure_owned
from app.exceptions import ValidationError
from app.models.enums import ImplementationStatus
from app.models.implementation import (
    Implementation,
    ImplementationCreate,
    ImplementationUpdate,
)
from app.utils.validation import reject_nulls

REQUIRED_ON_UPDATE = ("client_name", "status", "delivery_completed")


def _check_recurrence_window(start: date | None, end: date | None) -> None:
    """
    Reject a recurrence that ends before it starts.

    Raises:
        ValidationError: If both dates are set and `end` is before `start`.
    """
    if start is not None and end is not None and end < start:
        raise ValidationError(
            "Recurrence end date cannot be before its start date",
            field="recurrence_end_date",
        )


def get_implementations(
    session: Session,
    user_id: int,
    *,
    status: ImplementationStatus | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[Implementation]:
    """
    Retrieve a user's implementations.

    Parameters:
        session: Database session.
        user_id: Owner of the implementations.
        status: Only implementations in this status.
        offset: Number of records to skip.
        limit: Maximum number of records to return.

    Returns:
        list[Implementation]: Implementations ordered by client name.
    """
    statement = select(Implementation).where(Implementation.user_id == user_id)
    if status is not None:
        statement = statement.where(Implementation.status == status)
    statement = (
        statement.order_by(Implementation.client_name, Implementation.id_implementation)  # type: ignore
        .offset(offset)
        .limit(limit)
    )
    return list(session.exec(statement).all())


def get_implementation(
    session: Session, user_id: int, implementation_id: int
) -> Implementation:
    """
    Retrieve one of the user's implementations.

    Raises:
        NotFoundError: If the implementation doesn't exist or belongs to another user.
    """
    return ensure_owned(
        session.get(Implementation, implementation_id),
        user_id,
        "Implementation",
        implementation_id,
    )


def create_implementation(
    session: Session, user_id: int, implementation_in: ImplementationCreate
) -> Implementation:
    """
    Create an implementation owned by `user_id`.

    When no recurrence start date is given, the recurrence starts on the
    creation date.

    Raises:
        ValidationError: If the recurrence end date is before its start date.
    """
    _check_recurrence_window(
        implementation_in.recurrence_start_date, implementation_in.recurrence_end_date
    )
    implementation = Implementation.model_validate(
        implementation_in, update={"user_id": user_id}
    )
    session.add(implementation)
    session.commit()
    session.refresh(implementation)
    return implementation


def update_implementation(
    session: Session,
    user_id: int,
    implementation_id: int,
    implementation_update: ImplementationUpdate,
) -> Implementation:
    """
    Update an implementation.

    The recurrence window is checked on the merged result, so moving only one
    end of it is validated against the stored other end.

    Raises:
        NotFoundError: If the implementation doesn't exist or belongs to another user.
        ValidationError: If a required field is set to null, or the resulting
            end date is before the start date.
    """
    implementation = get_implementation(session, user_id, implementation_id)

    update_data = implementation_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, REQUIRED_ON_UPDATE)
    _check_recurrence_window(
        update_data.get("recurrence_start_date", implementation.recurrence_start_date),
        update_data.get("recurrence_end_date", implementation.recurrence_end_date),
    )
    for key, value in update_data.items():
        setattr(implementation, key, value)

    session.add(implementation)
    session.commit()
    session.refresh(implementation)
    return implementation


def delete_implementation(
    session: Session, user_id: int, implementation_id: int
) -> None:
    """
    Delete an implementation together with its billings.

    Raises:
        NotFoundError: If the implementation doesn't exist or belongs to another user.
    """
    implementation = get_implementation(session, user_id, implementation_id)
    session.delete(implementation)
    session.commit()
