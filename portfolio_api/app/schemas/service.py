"""Pydantic schema for the services offered on the portfolio."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ServiceIn(BaseModel):
    """Rule table for creating or replacing a service."""

    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = Field(..., max_length=255, examples=["Web development"])
    description: Optional[str] = Field(None, examples=["Sites and web applications"])
