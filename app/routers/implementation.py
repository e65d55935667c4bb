"""Implementation router: client engagements and their billings."""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.dependencies import CurrentUser
from app.database.database import get_session
from app.models.billing import (
    ImplementationBillingCreate,
    ImplementationBillingPublic,
    ImplementationBillingUpdate,
)
from app.models.enums import ImplementationStatus
from app.models.implementation import (
    ImplementationCreate,
    ImplementationPublic,
    ImplementationUpdate,
)
from app.services import billing as billing_service
from app.services import implementation as implementation_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/implementations", tags=["implementations"])


@router.get("/", response_model=list[ImplementationPublic])
def list_implementations(
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
    implementation_status: Annotated[
        ImplementationStatus | None, Query(alias="status")
    ] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> list[ImplementationPublic]:
    implementations = implementation_service.get_implementations(
        session,
        ensure_id(current_user.id_user, "User"),
        status=implementation_status,
        offset=offset,
        limit=limit,
    )
    return [ImplementationPublic.model_validate(i) for i in implementations]


@router.post(
    "/", response_model=ImplementationPublic, status_code=status.HTTP_201_CREATED
)
def create_implementation(
    implementation_in: ImplementationCreate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ImplementationPublic:
    """
    Create an implementation.

    ## Example Request

    ```json
    {
      "client_name": "Padaria Central",
      "recurrence_value": "1500.00",
      "recurrence_start_date": "2024-03-10",
      "status": "active"
    }
    ```

    Omitting `recurrence_start_date` makes the recurrence start on the
    creation date; omitting `recurrence_end_date` leaves it open-ended.

    Raises:
        `422 ValidationError`: If `recurrence_end_date` is before `recurrence_start_date`
            or `recurrence_value` is negative.
    """
    implementation = implementation_service.create_implementation(
        session, ensure_id(current_user.id_user, "User"), implementation_in
    )
    return ImplementationPublic.model_validate(implementation)


@router.get("/{implementation_id}", response_model=ImplementationPublic)
def get_implementation(
    implementation_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ImplementationPublic:
    implementation = implementation_service.get_implementation(
        session, ensure_id(current_user.id_user, "User"), implementation_id
    )
    return ImplementationPublic.model_validate(implementation)


@router.patch("/{implementation_id}", response_model=ImplementationPublic)
def update_implementation(
    implementation_id: int,
    implementation_update: ImplementationUpdate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ImplementationPublic:
    implementation = implementation_service.update_implementation(
        session,
        ensure_id(current_user.id_user, "User"),
        implementation_id,
        implementation_update,
    )
    return ImplementationPublic.model_validate(implementation)


@router.delete("/{implementation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_implementation(
    implementation_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> None:
    """Delete an implementation and every billing recorded against it."""
    implementation_service.delete_implementation(
        session, ensure_id(current_user.id_user, "User"), implementation_id
    )


@router.get(
    "/{implementation_id}/billings",
    response_model=list[ImplementationBillingPublic],
)
def list_billings(
    implementation_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> list[ImplementationBillingPublic]:
    billings = billing_service.get_billings(
        session, ensure_id(current_user.id_user, "User"), implementation_id
    )
    return [ImplementationBillingPublic.model_validate(b) for b in billings]


@router.post(
    "/{implementation_id}/billings",
    response_model=ImplementationBillingPublic,
    status_code=status.HTTP_201_CREATED,
)
def create_billing(
    implementation_id: int,
    billing_in: ImplementationBillingCreate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ImplementationBillingPublic:
    billing = billing_service.create_billing(
        session, ensure_id(current_user.id_user, "User"), implementation_id, billing_in
    )
    return ImplementationBillingPublic.model_validate(billing)


@router.patch(
    "/{implementation_id}/billings/{billing_id}",
    response_model=ImplementationBillingPublic,
)
def update_billing(
    implementation_id: int,
    billing_id: int,
    billing_update: ImplementationBillingUpdate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ImplementationBillingPublic:
    """Update a billing. Setting `is_paid` to true records the payment time."""
    billing = billing_service.update_billing(
        session,
        ensure_id(current_user.id_user, "User"),
        implementation_id,
        billing_id,
        billing_update,
    )
    return ImplementationBillingPublic.model_validate(billing)


@router.delete(
    "/{implementation_id}/billings/{billing_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_billing(
    implementation_id: int,
    billing_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> None:
    billing_service.delete_billing(
        session, ensure_id(current_user.id_user, "User"), implementation_id, billing_id
    )
