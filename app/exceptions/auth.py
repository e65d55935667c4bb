"""Sign-in and token errors. All of them map to HTTP 401."""

from app.exceptions.base import AppException


class AuthenticationError(AppException):
    pass


class InvalidCredentialsError(AuthenticationError):
    """The email/password pair matches no account."""

    def __init__(self, message: str = "Incorrect email or password"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """
    A bearer or refresh token could not be trusted.

    Covers bad signatures, malformed payloads, a wrong `type` claim and
    subjects that no longer match a user.
    """

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """The token's `exp` claim is in the past."""

    def __init__(self, token_type: str = "access"):
        self.token_type = token_type
        super().__init__(f"{token_type.capitalize()} token has expired")
