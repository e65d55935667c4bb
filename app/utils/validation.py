from typing import Any, Iterable, TypeVar
from app.exceptions import AppException, ValidationError

T = TypeVar("T")


def ensure_id(id_value: T | None, resource_name: str = "Resource") -> T:
    """
    Narrow an optional primary key to its value.

    Rows loaded from the database always have one; a None here means a
    transient object leaked into a code path that needs a persisted row.

    Raises:
        AppException: If `id_value` is None (HTTP 500).
    """
    if id_value is None:
        raise AppException(f"{resource_name} ID is missing")
    return id_value


def reject_nulls(update_data: dict[str, Any], required: Iterable[str]) -> None:
    """
    Refuse an explicit null for a column that cannot be empty.

    PATCH bodies may omit a field, but sending `null` for a NOT NULL column
    would only fail later, at commit.

    Raises:
        ValidationError: Naming the first such field.
    """
    for field in required:
        if field in update_data and update_data[field] is None:
            raise ValidationError(f"{field} cannot be null", field=field)


def mask_email(email: str) -> str:
    """
    Hide most of the local part of an email before it goes to the logs.

    'ana.souza@example.com' -> 'a***a@example.com'
    """
    local, at, domain = email.partition("@")
    if not (at and local and domain):
        return "***@***.***"
    if len(local) <= 2:
        return f"{local[0]}***@{domain}"
    return f"{local[0]}***{local[-1]}@{domain}"
