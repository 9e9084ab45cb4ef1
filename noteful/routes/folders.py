"""
Noteful API: Folder Route Handlers
==================================

What:  CRUD endpoints for folders.
How:   Delegates to FolderService with the request-scoped session.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderResponse, FolderWrite
from noteful.services.folder_service import folder_service


router = APIRouter(prefix="/folders", tags=["Folders"])


@router.get(
    "",
    response_model=List[FolderResponse],
    summary="List all folders",
)
async def list_folders(db: AsyncSession = Depends(get_db_session)) -> List[FolderResponse]:
    return await folder_service.list_all(db)


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={404: {"description": "Folder not found", "model": ErrorResponse}},
    summary="Get a single folder by ID",
)
async def get_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.get(db, folder_id)


@router.post(
    "",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing `name`", "model": ErrorResponse}},
    summary="Create a folder",
)
async def create_folder(
    payload: FolderWrite,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    """Creates a folder and points the Location header at it."""
    folder = await folder_service.create(db, payload)
    response.headers["Location"] = str(request.url_for("get_folder", folder_id=folder.id))
    return folder


@router.put(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={
        400: {"description": "Missing `name`", "model": ErrorResponse},
        404: {"description": "Folder not found", "model": ErrorResponse},
    },
    summary="Rename a folder",
)
async def update_folder(
    folder_id: int,
    payload: FolderWrite,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.update(db, folder_id, payload)


@router.delete(
    "/{folder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a folder",
    description="Idempotent: answers 204 whether or not the folder existed.",
)
async def delete_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_service.delete(db, folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
