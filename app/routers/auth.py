from typing import Annotated
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from loguru import logger
from pydantic import EmailStr, TypeAdapter, ValidationError as PydanticValidationError
from sqlmodel import Session

from app.database.database import get_session
from app.core.security import (
    authenticate_user,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.exceptions import InvalidCredentialsError, InvalidTokenError, ValidationError
from app.models.token import Token, TokenRefreshRequest
from app.models.user import UserCreate, UserPublic
from app.services import user as user_service
from app.utils.validation import mask_email

router = APIRouter(prefix="/auth", tags=["auth"])

_email_adapter = TypeAdapter(EmailStr)
MIN_PASSWORD_LENGTH = 6


def _validate_login_form(email: str, password: str) -> None:
    """
    Apply the sign-in form rules before touching the database.

    Raises:
        ValidationError: If the email is malformed or the password is shorter than 6 characters.
    """
    try:
        _email_adapter.validate_python(email)
    except PydanticValidationError:
        raise ValidationError("Invalid email", field="email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    session: Annotated[Session, Depends(get_session)],
) -> UserPublic:
    """
    Create an account.

    Raises:
        `409 AlreadyExistsError`: If the email is already registered.
        `422`: If the email is malformed or the password has fewer than 6 characters.
    """
    user = user_service.create_user(session, user_in)
    logger.info(f"User registered: {mask_email(user.email)}")
    return UserPublic.model_validate(user)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[Session, Depends(get_session)],
) -> Token:
    """
    Sign in with email and password.

    The OAuth2 form field is named `username`; it carries the email.

    Returns:
        `Token`: Access and refresh tokens whose subject is the user's email.

    Raises:
        `422 ValidationError`: If the email is malformed or the password too short.
        `401 InvalidCredentialsError`: If the email/password pair doesn't match an account.
    """
    _validate_login_form(form_data.username, form_data.password)
    user = authenticate_user(session, form_data.username, form_data.password)
    if not user:
        logger.info(f"Failed sign-in for {mask_email(form_data.username)}")
        raise InvalidCredentialsError()

    return Token(
        access_token=create_access_token(data={"sub": user.email}),
        refresh_token=create_refresh_token(data={"sub": user.email}),
        token_type="bearer",
    )


@router.post("/refresh", response_model=Token)
def refresh_token(
    request_data: TokenRefreshRequest,
    session: Annotated[Session, Depends(get_session)],
) -> Token:
    """
    Exchange a refresh token for a new access token.

    Expects JSON: {"refresh_token": "..."}

    Raises:
        `401 InvalidTokenError`: If the refresh token is invalid, expired, of the wrong type, or its user no longer exists.
    """
    incoming_refresh_token = request_data.refresh_token
    email = decode_token(incoming_refresh_token, "refresh")
    if user_service.get_user_by_email(session, email) is None:
        raise InvalidTokenError()

    return Token(
        access_token=create_access_token(data={"sub": email}),
        # TODO: rotate refresh tokens once they are tracked server-side
        refresh_token=incoming_refresh_token,
        token_type="bearer",
    )
