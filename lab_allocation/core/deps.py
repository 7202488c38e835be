# /lab_allocation/core/deps.py

from datetime import datetime, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from . import security
from ..models.auth_model import AdminSession

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def get_token_payload(token: str = Depends(oauth2_scheme)) -> dict:
    """Decodes the bearer token or rejects the request with a 401."""
    payload = security.decode_access_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session is invalid or has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def get_current_admin(payload: dict = Depends(get_token_payload)) -> AdminSession:
    """
    Resolves the authenticated admin session for a request.

    Used as a router-level dependency so that every data endpoint is gated
    behind a valid, unexpired, non-revoked token.
    """
    return AdminSession(
        username=payload["sub"],
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
