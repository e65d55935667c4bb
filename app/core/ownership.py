"""Row-level access rules.

Each owned table carries a `user_id` column. A row is visible to, and
modifiable by, its owner only. Billings have no owner column of their own and
inherit the owner of their implementation.
"""

from typing import Protocol, TypeVar

from app.exceptions import NotFoundError


class OwnedRow(Protocol):
    user_id: int


class BillingRow(Protocol):
    implementation_id: int


class ImplementationRow(OwnedRow, Protocol):
    id_implementation: int | None


R = TypeVar("R", bound=OwnedRow)


def is_owner(row: OwnedRow, requester_id: int) -> bool:
    """Return True when `requester_id` owns `row`."""
    return row.user_id == requester_id


def can_access_billing(
    billing: BillingRow, implementation: ImplementationRow, requester_id: int
) -> bool:
    """
    Decide whether a requester may read or change a billing record.

    Parameters:
        billing: The billing row.
        implementation: The implementation the caller claims the billing belongs to.
        requester_id: The authenticated user's id.

    Returns:
        bool: True only if the billing belongs to `implementation` and that implementation is owned by the requester.
    """
    return billing.implementation_id == implementation.id_implementation and is_owner(
        implementation, requester_id
    )


def ensure_owned(
    row: R | None, requester_id: int, resource: str, identifier: int
) -> R:
    """
    Return `row` if the requester owns it.

    A missing row and a row owned by someone else both raise the same error,
    so other users' ids cannot be probed.

    Raises:
        NotFoundError: If `row` is None or not owned by `requester_id`.
    """
    if row is None or not is_owner(row, requester_id):
        raise NotFoundError(resource, identifier)
    return row
