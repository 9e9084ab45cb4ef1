"""
Noteful API: Folder Schemas
===========================
"""

from typing import Optional

from pydantic import BaseModel, Field


class FolderResponse(BaseModel):
    """A folder as returned by every /folders endpoint."""
    id: int = Field(description="Folder identifier assigned by the store")
    name: str = Field(description="Folder name")

    model_config = {"from_attributes": True}


class FolderWrite(BaseModel):
    """
    Body of POST and PUT /folders.

    `name` is optional at the schema level so that a missing name is reported
    by the service as a 400 with a readable message instead of a 422.
    Unknown fields are ignored; only `name` is ever written.
    """
    name: Optional[str] = Field(default=None, description="Folder name (required)")
