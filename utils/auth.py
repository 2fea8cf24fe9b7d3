from __future__ import annotations

import time
from typing import Optional

import jwt  # type: ignore
from passlib.context import CryptContext  # type: ignore

from config.base import AuthConfig

_pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

SUBJECT_PREFIX = "u:"


def hash_password(raw: str) -> str:
    return _pwd_ctx.hash(raw)


def verify_password(raw: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return bool(_pwd_ctx.verify(raw, str(hashed)))
    except (ValueError, TypeError):
        # Malformed or unknown hash format
        return False


def mint_jwt_token(user_id: str, auth: AuthConfig) -> str | None:
    if not auth.jwt_secret:
        return None
    now = int(time.time())
    payload = {
        "sub": f"{SUBJECT_PREFIX}{user_id}",
        "iat": now,
        "exp": now + auth.session_ttl_minutes * 60,
    }
    token = jwt.encode(payload, auth.jwt_secret, algorithm=auth.jwt_algorithm)
    return (
        token if isinstance(token, str)
        else token.decode("utf-8")  # type: ignore[attr-defined]
    )


def verify_jwt_token(token: str, auth: AuthConfig) -> dict | None:
    if not auth.jwt_secret or not token:
        return None
    try:
        data = jwt.decode(
            token,
            auth.jwt_secret,
            algorithms=[auth.jwt_algorithm],
        )
    except jwt.PyJWTError:
        return None
    return data if isinstance(data, dict) else None


def subject_user_id(claims: Optional[dict]) -> Optional[str]:
    """Extract the user id from a ``u:<id>`` subject claim."""
    if not claims:
        return None
    sub = str(claims.get("sub") or "")
    if not sub.startswith(SUBJECT_PREFIX):
        return None
    user_id = sub[len(SUBJECT_PREFIX):].strip()
    return user_id or None
