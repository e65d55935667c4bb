"""Billing service module: charges recorded against an implementation."""

from sqlmodel import Session, select

from app.core.config import local_now
from app.core.ownership import can_access_billing
from app.exceptions import NotFoundError
from app.models.billing import (
    ImplementationBilling,
    ImplementationBillingCreate,
    ImplementationBillingUpdate,
)
from app.services import implementation as implementation_service
from app.utils.validation import reject_nulls

REQUIRED_ON_UPDATE = ("billing_date", "amount", "is_paid")


def get_billings(
    session: Session, user_id: int, implementation_id: int
) -> list[ImplementationBilling]:
    """
    Retrieve the billings of one of the user's implementations.

    Returns:
        list[ImplementationBilling]: Billings ordered by billing date.

    Raises:
        NotFoundError: If the implementation doesn't exist or belongs to another user.
    """
    implementation_service.get_implementation(session, user_id, implementation_id)
    statement = (
        select(ImplementationBilling)
        .where(ImplementationBilling.implementation_id == implementation_id)
        .order_by(ImplementationBilling.billing_date, ImplementationBilling.id_billing)  # type: ignore
    )
    return list(session.exec(statement).all())


def get_billing(
    session: Session, user_id: int, implementation_id: int, billing_id: int
) -> ImplementationBilling:
    """
    Retrieve a billing through its implementation.

    Raises:
        NotFoundError: If the implementation or billing doesn't exist, the
            billing belongs to a different implementation, or the
            implementation belongs to another user.
    """
    implementation = implementation_service.get_implementation(
        session, user_id, implementation_id
    )
    billing = session.get(ImplementationBilling, billing_id)
    if billing is None or not can_access_billing(billing, implementation, user_id):
        raise NotFoundError("Billing", billing_id)
    return billing


def create_billing(
    session: Session,
    user_id: int,
    implementation_id: int,
    billing_in: ImplementationBillingCreate,
) -> ImplementationBilling:
    """
    Record a charge against one of the user's implementations.

    A billing created already paid gets `paid_at` set to now.

    Raises:
        NotFoundError: If the implementation doesn't exist or belongs to another user.
    """
    implementation_service.get_implementation(session, user_id, implementation_id)
    billing = ImplementationBilling.model_validate(
        billing_in,
        update={
            "implementation_id": implementation_id,
            "paid_at": local_now() if billing_in.is_paid else None,
        },
    )
    session.add(billing)
    session.commit()
    session.refresh(billing)
    return billing


def update_billing(
    session: Session,
    user_id: int,
    implementation_id: int,
    billing_id: int,
    billing_update: ImplementationBillingUpdate,
) -> ImplementationBilling:
    """
    Update a billing.

    Switching `is_paid` to true stamps `paid_at`; switching it back clears it.

    Raises:
        NotFoundError: If the billing isn't reachable by this user.
        ValidationError: If a required field is set to null.
    """
    billing = get_billing(session, user_id, implementation_id, billing_id)

    update_data = billing_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, REQUIRED_ON_UPDATE)
    if "is_paid" in update_data and update_data["is_paid"] != billing.is_paid:
        billing.paid_at = local_now() if update_data["is_paid"] else None
    for key, value in update_data.items():
        setattr(billing, key, value)

    session.add(billing)
    session.commit()
    session.refresh(billing)
    return billing


def delete_billing(
    session: Session, user_id: int, implementation_id: int, billing_id: int
) -> None:
    """
    Delete a billing of one of the user's implementations.

    Raises:
        NotFoundError: If the billing isn't reachable by this user.
    """
    billing = get_billing(session, user_id, implementation_id, billing_id)
    session.delete(billing)
    session.commit()
