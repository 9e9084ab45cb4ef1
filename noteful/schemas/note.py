"""
Noteful API: Note Schemas
=========================

What:  JSON contract of the /notes endpoints.
How:   Python attributes are snake_case; the wire format uses the camelCase
       aliases (`folderId`, `folderName`). populate_by_name lets request
       bodies use either spelling, so PUT accepts `folder_id` as well.

Hydrated note:
    {
        "id": 7,
        "title": "Groceries",
        "content": "milk, eggs",
        "folderId": 2,
        "folderName": "Home",
        "tags": [{"id": 1, "name": "todo"}]
    }
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from noteful.schemas.tag import TagResponse


class NoteResponse(BaseModel):
    """A hydrated note: one object per note with its folder and tag list."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="Note identifier assigned by the store")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[int] = Field(
        default=None,
        alias="folderId",
        description="Owning folder id (null when unfiled)",
    )
    folder_name: Optional[str] = Field(
        default=None,
        alias="folderName",
        description="Owning folder name (null when unfiled)",
    )
    tags: List[TagResponse] = Field(
        default_factory=list,
        description="Tags attached to the note, in first-seen order",
    )


class NoteWrite(BaseModel):
    """
    Body of POST and PUT /notes.

    `title` is validated by NoteService (400 with a message) rather than by
    pydantic (422). `tags` is the complete list of tag ids for the note;
    omitting it or sending null means no tags.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, description="Note title (required)")
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[int] = Field(
        default=None,
        alias="folderId",
        description="Folder to file the note under",
    )
    tags: Optional[List[int]] = Field(
        default=None,
        description="Ids of the tags to attach; replaces the current set",
    )

    def tag_ids(self) -> List[int]:
        """Distinct tag ids in request order."""
        return list(dict.fromkeys(self.tags or []))
