"""
Noteful API: Tag Schemas
========================
"""

from typing import Optional

from pydantic import BaseModel, Field


class TagResponse(BaseModel):
    """A tag as returned by every /tags endpoint and nested inside notes."""
    id: int = Field(description="Tag identifier assigned by the store")
    name: str = Field(description="Tag name")

    model_config = {"from_attributes": True}


class TagWrite(BaseModel):
    """Body of POST and PUT /tags. Only `name` is read."""
    name: Optional[str] = Field(default=None, description="Tag name (required)")
