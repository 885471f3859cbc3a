"""Pydantic schema for countries (``pays``)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CountryIn(BaseModel):
    """Rule table for creating or replacing a country."""

    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = Field(..., max_length=255, examples=["France"])
    image: Optional[str] = Field(None, examples=["http://example.com/flag.png"])
