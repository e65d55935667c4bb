"""JWT issuing and checking, and email/password sign-in."""

from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import ExpiredSignatureError, PyJWTError
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session, select

from app.core.config import get_settings
from app.core.password import DUMMY_HASH, verify_and_update_password
from app.exceptions import AppException, InvalidTokenError, TokenExpiredError
from app.models.token import TokenPayload, TokenType
from app.models.user import User


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """
    Return the user matching `email` and `password`, or None.

    An unknown email is still checked against a dummy hash, so response time
    does not reveal which emails are registered. A stored hash made with
    outdated Argon2 parameters is replaced on a successful sign-in.
    """
    statement = select(User).where(User.email == email.strip().lower())
    user = session.exec(statement).first()

    valid, new_hash = verify_and_update_password(
        password, user.hashed_password if user else DUMMY_HASH
    )
    if not (valid and user):
        return None

    if new_hash is not None:
        user.hashed_password = new_hash
        session.add(user)
        session.commit()
        session.refresh(user)
        logger.debug(f"Upgraded password hash for user {user.id_user}")
    return user


def create_token(data: dict, expires_delta: timedelta, type: TokenType) -> str:
    """
    Sign `data` as a JWT that expires after `expires_delta`.

    The `exp` and `type` claims are added here; `data` should carry `sub`.

    Raises:
        AppException: If PyJWT cannot encode the payload.
    """
    settings = get_settings()
    claims = {
        **data,
        "exp": datetime.now(timezone.utc) + expires_delta,
        "type": type,
    }
    try:
        return jwt.encode(
            claims,
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )
    except PyJWTError as e:
        raise AppException("Could not generate authentication token.") from e


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Short-lived token sent as `Authorization: Bearer` on every request."""
    return create_token(
        data,
        expires_delta=expires_delta
        or timedelta(minutes=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES),
        type="access",
    )


def create_refresh_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Long-lived token only accepted by `/auth/refresh`."""
    return create_token(
        data,
        expires_delta=expires_delta
        or timedelta(days=get_settings().REFRESH_TOKEN_EXPIRE_DAYS),
        type="refresh",
    )


def decode_token(token: str, expected_type: TokenType) -> str:
    """
    Verify a JWT and return its subject (the user's email).

    Parameters:
        token (str): Encoded JWT.
        expected_type (TokenType): The `type` claim the token must carry.

    Returns:
        str: The `sub` claim.

    Raises:
        TokenExpiredError: If the token's `exp` has passed.
        InvalidTokenError: If the signature is bad, the claims are malformed or missing, or the type differs.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError(expected_type)
    except PyJWTError:
        raise InvalidTokenError()

    try:
        payload = TokenPayload.model_validate(claims)
    except PydanticValidationError:
        raise InvalidTokenError()
    if payload.type != expected_type:
        raise InvalidTokenError()
    return payload.sub
