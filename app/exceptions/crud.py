"""Errors raised by the owner-scoped CRUD services."""

from app.exceptions.base import AppException


class NotFoundError(AppException):
    """
    The requested row does not exist for this user.

    Also raised for rows owned by someone else, so the two cases are
    indistinguishable to the caller.
    """

    def __init__(self, resource: str, identifier: int | str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with identifier '{identifier}' not found")


class AlreadyExistsError(AppException):
    """A unique column already holds `value` (e.g. a registered email)."""

    def __init__(self, resource: str, field: str, value: int | str):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field}='{value}' already exists")


class ValidationError(AppException):
    """
    Input passed schema validation but breaks a business rule.

    Parameters:
        message (str): Shown to the client as `detail`.
        field (str | None): Offending field, echoed back as `field` when set.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
