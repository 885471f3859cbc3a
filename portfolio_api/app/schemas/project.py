"""
Pydantic schema for projects.

Projects are identified by their ``title``; the description and
illustration are free text and may be omitted.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectIn(BaseModel):
    """Rule table for creating or replacing a project."""

    model_config = ConfigDict(strict=True, extra="ignore")

    title: str = Field(..., max_length=255, examples=["Website redesign"])
    description: Optional[str] = Field(None, examples=["Full rebuild of the corporate site"])
    image: Optional[str] = Field(None, examples=["http://example.com/project.jpg"])
