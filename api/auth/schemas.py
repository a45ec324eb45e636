"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel


# Fields are optional and unbounded so any bad input is reported as bad credentials.
class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str
