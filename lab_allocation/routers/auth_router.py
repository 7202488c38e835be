# /lab_allocation/routers/auth_router.py

"""
This module defines the API for the admin session lifecycle:
- Login and token issue (`/token`)
- Retrieving the current session (`/me`)
- Signing out (`/logout`)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordRequestForm

from ..core import security
from ..core.deps import get_current_admin, get_token_payload
from ..models.auth_model import Token, AdminSession

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=Token, summary="Log In as Admin")
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Handles admin login, compatible with the OAuth2 Password Flow.

    On success it returns a signed, expiring session token that must be sent
    as a Bearer token on every other /api request.
    """
    if not form_data.username or not form_data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter both username and password",
        )

    if not security.verify_admin_credentials(form_data.username, form_data.password):
        logger.warning(f"Failed login attempt for username '{form_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    issued = security.create_access_token(subject=form_data.username)
    logger.info(f"Admin '{form_data.username}' logged in")
    return Token(access_token=issued["access_token"], token_type="bearer", expires_at=issued["expires_at"])


@router.get("/me", response_model=AdminSession, summary="Get Current Session")
def read_current_session(current_admin: AdminSession = Depends(get_current_admin)):
    return current_admin


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Log Out")
def logout(payload: dict = Depends(get_token_payload)):
    """Revokes the presented token; it is rejected from then on."""
    security.revoke_token(payload)
    logger.info(f"Admin '{payload['sub']}' logged out")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
