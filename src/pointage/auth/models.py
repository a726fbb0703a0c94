"""Auth data models.

AuthProfile is the only identity that travels past the login handler:
it is embedded in tokens and handed to AuthorizationService. It never
carries the password digest or salts.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AuthProfile(BaseModel):
    """Minimal authenticated identity."""

    security_id: str = Field(..., description="Stable subject identifier")
    name: str = Field(..., description="Display name (the user's login)")
    id: Optional[int] = Field(None, description="User primary key")
    email: Optional[str] = Field(None, description="User email")

    model_config = {"frozen": True}


class AuthenticationMetadata(BaseModel):
    """Per-route authentication options.

    With throw_error=False a failed authentication yields no profile
    (anonymous access) instead of raising.
    """

    throw_error: bool = True

    model_config = {"frozen": True}


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
