"""
Translate domain exceptions into JSON error responses.

Services only raise `app.exceptions` types; the status codes live here.
Every body has a `detail` string, and 422s add `field` when the failing
input is known.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from app.exceptions import (
    AppException,
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
    AuthenticationError,
    DashboardUnavailableError,
)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """404. Also used for rows owned by another user."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


async def already_exists_handler(
    request: Request, exc: AlreadyExistsError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
    )


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """422 with the offending `field`, mirroring how the sign-in form flags inputs."""
    content = {"detail": str(exc)}
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, content=content
    )


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},  # RFC 6750
    )


async def dashboard_unavailable_handler(
    request: Request, exc: DashboardUnavailableError
) -> JSONResponse:
    """
    503 when a dashboard read failed.

    The name of the failed read was already logged by the service and is not
    sent to the client. Clients keep their previous snapshot and retry.
    """
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """500 for any other AppException; the message is logged, not returned."""
    logger.error(f"Unhandled application error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal error occurred"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Attach every handler above to `app`.

    Starlette resolves handlers along the exception's MRO, so the AppException
    catch-all only applies to types without a more specific handler.
    """
    app.add_exception_handler(NotFoundError, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AlreadyExistsError, already_exists_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AuthenticationError, authentication_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        DashboardUnavailableError, dashboard_unavailable_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
