"""
Pydantic models for users and authentication.

Users are provisioned out of band (see ``create_user.py``) and only
authenticate through the API.  ``UserRead`` never carries the password
hash.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginIn(BaseModel):
    """Credentials accepted by ``POST /auth/login``."""

    model_config = ConfigDict(strict=True, extra="ignore")

    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., examples=["password"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    name: str
    email: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
