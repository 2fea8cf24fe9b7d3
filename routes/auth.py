from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Response  # type: ignore
from pydantic import BaseModel, EmailStr  # type: ignore

from config import BaseConfig
from core.dependencies import (
    get_authentication_service,
    get_current_session,
    get_settings,
)
from domain.models.session import UserSession
from services.infrastructure.authentication_service import AuthenticationService

router = APIRouter(prefix="/auth", tags=["auth"])


class SigninRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    ok: bool
    email: EmailStr
    role: str
    token_set: bool


@router.post("/signin", response_model=AuthResponse)
def signin(
    payload: SigninRequest,
    resp: Response,
    auth: AuthenticationService = Depends(get_authentication_service),
    settings: BaseConfig = Depends(get_settings),
) -> AuthResponse:
    session = auth.sign_in(payload.email, payload.password)
    token = auth.issue_token(session)
    # HTTP-only cookie carrying the session JWT
    resp.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        secure=settings.auth.cookie_secure,
        samesite="lax",
        max_age=settings.auth.session_ttl_minutes * 60,
        path="/",
    )
    return AuthResponse(ok=True, email=session.email, role=session.role.value, token_set=True)


@router.post("/logout")
def logout(
    resp: Response,
    session: Optional[UserSession] = Depends(get_current_session),
    auth: AuthenticationService = Depends(get_authentication_service),
    settings: BaseConfig = Depends(get_settings),
) -> dict:
    auth.sign_out(session)
    # Expire the cookie immediately
    resp.delete_cookie(settings.auth.cookie_name, path="/")
    return {"ok": True}


@router.get("/status")
def auth_status(session: Optional[UserSession] = Depends(get_current_session)) -> dict:
    if session is None:
        return {"authenticated": False, "message": "No valid session"}
    return {"authenticated": True, **session.to_dict()}
