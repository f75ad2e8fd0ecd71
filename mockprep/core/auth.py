from __future__ import annotations

from typing import Optional

import urllib3
from fastapi import HTTPException, Request, status
from google.auth.transport.urllib3 import Request as GoogleAuthRequest
from google.oauth2 import id_token as google_id_token

from mockprep.core.config import settings
from mockprep.schemas.user import UserContext


async def get_current_user(request: Request) -> UserContext:
    # A bearer token always wins, so dev mode can still exercise real identities.
    bearer = _read_bearer_token(request)
    if bearer:
        token_info = _verify_firebase_token(bearer)
        user_id = str(token_info.get("user_id") or token_info.get("sub") or "").strip()
        if not user_id:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token (missing subject)")
        email = token_info.get("email") or None
        user_name = str(token_info.get("name") or "").strip() or _derive_name(user_id, email)
        return UserContext(user_id=user_id, user_name=user_name, email=email)

    if settings.auth_mode == "firebase":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    # Dev-mode user context:
    # - X-User-Id: uid-123
    # - X-User-Name: Jane Doe
    # - X-User-Email: jane@example.com
    user_id = (request.headers.get("x-user-id") or "demo-user").strip()
    email = request.headers.get("x-user-email") or None
    user_name = (request.headers.get("x-user-name") or "").strip() or _derive_name(user_id, email)
    return UserContext(user_id=user_id, user_name=user_name, email=email)


def _read_bearer_token(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    prefix = "bearer "
    if auth.lower().startswith(prefix):
        return auth[len(prefix) :].strip()
    return None


def _verify_firebase_token(token: str) -> dict:
    if not settings.firebase_project_id:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Missing Firebase project id")
    try:
        req = GoogleAuthRequest(urllib3.PoolManager())
        return google_id_token.verify_firebase_token(
            token,
            req,
            audience=settings.firebase_project_id,
            clock_skew_in_seconds=int(settings.google_clock_skew_seconds),
        )
    except Exception as exc:
        detail = "Invalid Firebase token"
        if settings.environment != "production":
            detail = f"Invalid Firebase token: {exc}"
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _derive_name(user_id: str, email: Optional[str]) -> str:
    local = (email or "").split("@", 1)[0].strip()
    if not local:
        return user_id
    parts = [p for p in local.replace("_", ".").split(".") if p]
    if not parts:
        return local
    return " ".join(p[:1].upper() + p[1:] for p in parts)
