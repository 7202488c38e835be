# /lab_allocation/models/auth_model.py

from datetime import datetime

from pydantic import BaseModel, Field


class Token(BaseModel):
    """The response returned after a successful admin login."""
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime = Field(..., description="When the session token stops being accepted.")


class AdminSession(BaseModel):
    """The authenticated admin attached to a request."""
    username: str
    expires_at: datetime
