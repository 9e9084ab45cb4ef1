"""
Noteful API: Tag Route Handlers
===============================

What:  CRUD endpoints for tags.
How:   Delegates to TagService with the request-scoped session.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.tag import TagResponse, TagWrite
from noteful.services.tag_service import tag_service


router = APIRouter(prefix="/tags", tags=["Tags"])


@router.get(
    "",
    response_model=List[TagResponse],
    summary="List all tags",
)
async def list_tags(db: AsyncSession = Depends(get_db_session)) -> List[TagResponse]:
    return await tag_service.list_all(db)


@router.get(
    "/{tag_id}",
    response_model=TagResponse,
    responses={404: {"description": "Tag not found", "model": ErrorResponse}},
    summary="Get a single tag by ID",
)
async def get_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return await tag_service.get(db, tag_id)


@router.post(
    "",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing `name`", "model": ErrorResponse}},
    summary="Create a tag",
)
async def create_tag(
    payload: TagWrite,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    """Creates a tag and points the Location header at it."""
    tag = await tag_service.create(db, payload)
    response.headers["Location"] = str(request.url_for("get_tag", tag_id=tag.id))
    return tag


@router.put(
    "/{tag_id}",
    response_model=TagResponse,
    responses={
        400: {"description": "Missing `name`", "model": ErrorResponse},
        404: {"description": "Tag not found", "model": ErrorResponse},
    },
    summary="Rename a tag",
)
async def update_tag(
    tag_id: int,
    payload: TagWrite,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return await tag_service.update(db, tag_id, payload)


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a tag",
    description="Idempotent: answers 204 whether or not the tag existed.",
)
async def delete_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await tag_service.delete(db, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
