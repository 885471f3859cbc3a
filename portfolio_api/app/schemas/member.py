"""
Pydantic schema for portfolio members.

A member is a person shown on the portfolio: a display name, a unique
contact e‑mail and an optional picture.  The same rule table is used
for creation and full replacement; the uniqueness of ``email`` is
checked by the service layer because it requires the database.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class MemberIn(BaseModel):
    """Rule table for creating or replacing a member."""

    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = Field(..., max_length=255, examples=["John Doe"])
    email: EmailStr = Field(..., examples=["john@example.com"])
    image: Optional[str] = Field(None, examples=["http://example.com/image.jpg"])
