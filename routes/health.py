"""Health endpoint."""

from fastapi import APIRouter, Depends  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore

from core.db import SessionFactory
from core.dependencies import get_session_factory
from services.health import check_database_health

router = APIRouter(tags=["health"])


@router.get("/health")
def health(factory: SessionFactory = Depends(get_session_factory)) -> JSONResponse:
    payload = check_database_health(factory)
    return JSONResponse(status_code=200 if payload["healthy"] else 503, content=payload)
