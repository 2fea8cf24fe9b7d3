"""Lending ledger routes."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Path  # type: ignore
from pydantic import BaseModel  # type: ignore

from core.dependencies import get_current_session, get_lending_service
from domain.models.session import UserSession
from services.application.lending_service import LendingService

router = APIRouter(prefix="/lending", tags=["lending"])


class RespondRequest(BaseModel):
    version: int


class UpdateTokenCountRequest(BaseModel):
    token_count: int
    version: int


def _listing(records) -> Dict[str, Any]:
    return {
        "records": [r.to_summary() for r in records],
        "count": len(records),
    }


@router.get("")
def list_own_lendings(
    session: Optional[UserSession] = Depends(get_current_session),
    service: LendingService = Depends(get_lending_service),
) -> Dict[str, Any]:
    return _listing(service.list_records(session))


@router.get("/users/{owner_id}")
def list_user_lendings(
    owner_id: str = Path(..., min_length=1),
    session: Optional[UserSession] = Depends(get_current_session),
    service: LendingService = Depends(get_lending_service),
) -> Dict[str, Any]:
    return _listing(service.list_records(session, owner_id))


@router.post("/{record_id}/accept")
def accept_lending(
    payload: RespondRequest,
    record_id: int = Path(..., gt=0),
    session: Optional[UserSession] = Depends(get_current_session),
    service: LendingService = Depends(get_lending_service),
) -> Dict[str, Any]:
    record = service.accept(session, record_id, payload.version)
    return {"success": True, "message": "Verleihung akzeptiert", "record": record.to_summary()}


@router.post("/{record_id}/decline")
def decline_lending(
    payload: RespondRequest,
    record_id: int = Path(..., gt=0),
    session: Optional[UserSession] = Depends(get_current_session),
    service: LendingService = Depends(get_lending_service),
) -> Dict[str, Any]:
    record = service.decline(session, record_id, payload.version)
    return {"success": True, "message": "Verleihung abgelehnt", "record": record.to_summary()}


@router.patch("/{record_id}")
def update_lending(
    payload: UpdateTokenCountRequest,
    record_id: int = Path(..., gt=0),
    session: Optional[UserSession] = Depends(get_current_session),
    service: LendingService = Depends(get_lending_service),
) -> Dict[str, Any]:
    record = service.update_token_count(session, record_id, payload.token_count, payload.version)
    return {"success": True, "message": "Verleihung aktualisiert", "record": record.to_summary()}
