"""Prospect service module for owner-scoped CRUD operations."""

from sqlmodel import Session, select

from app.core.ownership import ensure_owned
from app.models.enums import ProspectStatus
from app.models.prospect import Prospect, ProspectCreate, ProspectUpdate
from app.utils.validation import reject_nulls

REQUIRED_ON_UPDATE = ("name", "status")


def get_prospects(
    session: Session,
    user_id: int,
    *,
    status: ProspectStatus | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[Prospect]:
    """
    Retrieve a user's prospects.

    Parameters:
        session: Database session.
        user_id: Owner of the prospects.
        status: Only prospects in this status.
        offset: Number of records to skip.
        limit: Maximum number of records to return.

    Returns:
        list[Prospect]: Prospects ordered by most recent first.
    """
    statement = select(Prospect).where(Prospect.user_id == user_id)
    if status is not None:
        statement = statement.where(Prospect.status == status)
    statement = (
        statement.order_by(Prospect.created_at.desc(), Prospect.id_prospect.desc())  # type: ignore
        .offset(offset)
        .limit(limit)
    )
    return list(session.exec(statement).all())


def get_prospect(session: Session, user_id: int, prospect_id: int) -> Prospect:
    """
    Retrieve one of the user's prospects.

    Raises:
        NotFoundError: If the prospect doesn't exist or belongs to another user.
    """
    return ensure_owned(
        session.get(Prospect, prospect_id), user_id, "Prospect", prospect_id
    )


def create_prospect(
    session: Session, user_id: int, prospect_in: ProspectCreate
) -> Prospect:
    prospect = Prospect.model_validate(prospect_in, update={"user_id": user_id})
    session.add(prospect)
    session.commit()
    session.refresh(prospect)
    return prospect


def update_prospect(
    session: Session, user_id: int, prospect_id: int, prospect_update: ProspectUpdate
) -> Prospect:
    """
    Update a prospect, including moving it to `converted`.

    Raises:
        NotFoundError: If the prospect doesn't exist or belongs to another user.
        ValidationError: If name or status is set to null.
    """
    prospect = get_prospect(session, user_id, prospect_id)

    update_data = prospect_update.model_dump(exclude_unset=True)
    reject_nulls(update_data, REQUIRED_ON_UPDATE)
    for key, value in update_data.items():
        setattr(prospect, key, value)

    session.add(prospect)
    session.commit()
    session.refresh(prospect)
    return prospect


def delete_prospect(session: Session, user_id: int, prospect_id: int) -> None:
    prospect = get_prospect(session, user_id, prospect_id)
    session.delete(prospect)
    session.commit()
