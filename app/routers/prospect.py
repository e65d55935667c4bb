"""Prospect router: the signed-in user's sales pipeline."""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.dependencies import CurrentUser
from app.database.database import get_session
from app.models.enums import ProspectStatus
from app.models.prospect import ProspectCreate, ProspectPublic, ProspectUpdate
from app.services import prospect as prospect_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/prospects", tags=["prospects"])


@router.get("/", response_model=list[ProspectPublic])
def list_prospects(
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
    prospect_status: Annotated[ProspectStatus | None, Query(alias="status")] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> list[ProspectPublic]:
    prospects = prospect_service.get_prospects(
        session,
        ensure_id(current_user.id_user, "User"),
        status=prospect_status,
        offset=offset,
        limit=limit,
    )
    return [ProspectPublic.model_validate(p) for p in prospects]


@router.post("/", response_model=ProspectPublic, status_code=status.HTTP_201_CREATED)
def create_prospect(
    prospect_in: ProspectCreate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ProspectPublic:
    prospect = prospect_service.create_prospect(
        session, ensure_id(current_user.id_user, "User"), prospect_in
    )
    return ProspectPublic.model_validate(prospect)


@router.get("/{prospect_id}", response_model=ProspectPublic)
def get_prospect(
    prospect_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ProspectPublic:
    prospect = prospect_service.get_prospect(
        session, ensure_id(current_user.id_user, "User"), prospect_id
    )
    return ProspectPublic.model_validate(prospect)


@router.patch("/{prospect_id}", response_model=ProspectPublic)
def update_prospect(
    prospect_id: int,
    prospect_update: ProspectUpdate,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> ProspectPublic:
    prospect = prospect_service.update_prospect(
        session, ensure_id(current_user.id_user, "User"), prospect_id, prospect_update
    )
    return ProspectPublic.model_validate(prospect)


@router.delete("/{prospect_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_prospect(
    prospect_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: CurrentUser,
) -> None:
    prospect_service.delete_prospect(
        session, ensure_id(current_user.id_user, "User"), prospect_id
    )
