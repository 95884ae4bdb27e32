"""
JWT claim models.

The authenticated user itself lives in shared.models so modules can use
it without importing the API package.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class TokenPayload(BaseModel):
    """Supabase access token claims."""
    model_config = ConfigDict(extra="ignore")

    sub: str  # User ID
    email: str = ""
    email_confirmed_at: Optional[str] = None
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    user_metadata: dict = Field(default_factory=dict)
