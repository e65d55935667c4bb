from datetime import datetime
from typing import Literal
from pydantic import BaseModel

TokenType = Literal["access", "refresh"]


class Token(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    """Claims every token issued by `/auth/token` carries."""

    sub: str  # User email
    type: TokenType
    exp: datetime


class TokenRefreshRequest(BaseModel):
    refresh_token: str
