"""FastAPI dependencies shared by every owner-scoped router."""

from typing import Annotated
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from app.core.security import decode_token
from app.database.database import get_session
from app.exceptions import InvalidTokenError
from app.models.user import User
from app.services import user as user_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Session = Depends(get_session),
) -> User:
    """
    Resolve the signed-in user from the bearer access token.

    Every row query in the routers takes its owner id from here, so there is no
    path to another user's data that skips this check.

    Raises:
        InvalidTokenError: Bad token, refresh token used as access token, or the user was deleted (401).
        TokenExpiredError: The access token has expired (401).
    """
    email = decode_token(token, "access")
    user = user_service.get_user_by_email(session, email)
    if user is None:
        raise InvalidTokenError()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
