"""
Noteful API: Note Route Handlers
================================

What:  CRUD endpoints for notes, returning hydrated notes.
How:   Extracts query parameters and bodies, delegates to NoteService.

Filtering:
    GET /notes?searchTerm=milk&folderId=2&tagId=5
    Every supplied filter must match (AND).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteResponse, NoteWrite
from noteful.services.note_service import note_service


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List notes, optionally filtered",
    description=(
        "Returns hydrated notes ordered by id. `searchTerm` matches a substring of "
        "the title, `folderId` restricts to one folder, `tagId` to notes carrying "
        "that tag. Filters combine with AND."
    ),
)
async def list_notes(
    search_term: Optional[str] = Query(
        default=None, alias="searchTerm",
        description="Substring to look for in note titles",
    ),
    folder_id: Optional[int] = Query(
        default=None, alias="folderId",
        description="Only notes filed in this folder",
    ),
    tag_id: Optional[int] = Query(
        default=None, alias="tagId",
        description="Only notes carrying this tag",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(
        db=db,
        search_term=search_term,
        folder_id=folder_id,
        tag_id=tag_id,
    )


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single hydrated note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db=db, note_id=note_id)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing `title` or unknown folder/tag", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    payload: NoteWrite,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note with its folder and tags.

    Body: {"title": "...", "content": "...", "folderId": 1, "tags": [1, 2]}
    """
    note = await note_service.create_note(db=db, payload=payload)
    response.headers["Location"] = str(request.url_for("get_note", note_id=note.id))
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing `title` or unknown folder/tag", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update a note and replace its tags",
)
async def update_note(
    note_id: int,
    payload: NoteWrite,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Update title/content/folder and replace the tag set.

    `title` is required on every update. `tags` is the full new tag set;
    leaving it out clears the note's tags.
    """
    return await note_service.update_note(db=db, note_id=note_id, payload=payload)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a note",
    description="Idempotent: answers 204 whether or not the note existed.",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
