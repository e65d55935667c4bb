"""Routes for the signed-in user's own account."""

from typing import Annotated
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.dependencies import CurrentUser
from app.database.database import get_session
from app.models.user import UserPublic, UserUpdate
from app.services import user as user_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserPublic)
def read_me(current_user: CurrentUser) -> UserPublic:
    """Return the authenticated user."""
    return UserPublic.model_validate(current_user)


@router.patch("/me", response_model=UserPublic)
def update_me(
    user_update: UserUpdate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> UserPublic:
    """Update the authenticated user's name or password."""
    user = user_service.update_user(
        session, ensure_id(current_user.id_user, "User"), user_update
    )
    return UserPublic.model_validate(user)
