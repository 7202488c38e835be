# /lab_allocation/core/security.py

"""
Credential checking and the session-token lifecycle.

An admin session is a signed JWT carrying the admin username (`sub`), a
unique token id (`jti`) and an expiry (`exp`). Signing out adds the token id
to an in-process revocation list until the token would have expired anyway.
"""

import hmac
import logging
import secrets
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from .config import settings

logger = logging.getLogger(__name__)

if settings.JWT_SECRET_KEY:
    _SECRET_KEY = settings.JWT_SECRET_KEY
else:
    # Tokens issued with this key do not survive a restart.
    logger.warning("JWT_SECRET_KEY is not set; using a random per-process signing key.")
    _SECRET_KEY = secrets.token_urlsafe(32)

# jti -> expiry of every token revoked by sign-out
_revoked_tokens: Dict[str, datetime] = {}
_revoked_lock = threading.Lock()


def verify_admin_credentials(username: str, password: str) -> bool:
    """Checks a username/password pair against the configured admin account."""
    if not settings.ADMIN_PASSWORD:
        logger.error("ADMIN_PASSWORD is not configured; refusing all logins.")
        return False
    username_ok = hmac.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode())
    password_ok = hmac.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
    return username_ok and password_ok


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> Dict:
    """
    Issues a signed session token for `subject`.

    Returns a dict with the encoded token and its expiry so the caller can
    hand both back to the client.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": subject, "jti": uuid.uuid4().hex, "exp": expire}
    token = jwt.encode(payload, _SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return {"access_token": token, "expires_at": expire}


def decode_access_token(token: str) -> Optional[Dict]:
    """
    Returns the token payload, or None when the token is malformed, expired,
    signed with another key, or revoked.
    """
    try:
        payload = jwt.decode(token, _SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected session token: {e}")
        return None
    with _revoked_lock:
        is_revoked = payload.get("jti") in _revoked_tokens
    if is_revoked:
        return None
    return payload


def revoke_token(payload: Dict) -> None:
    """Marks a decoded token as signed out."""
    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    with _revoked_lock:
        _prune_revoked_tokens()
        _revoked_tokens[payload["jti"]] = expires_at


def _prune_revoked_tokens() -> None:
    # Caller holds _revoked_lock.
    now = datetime.now(timezone.utc)
    for jti in [jti for jti, exp in _revoked_tokens.items() if exp <= now]:
        del _revoked_tokens[jti]
