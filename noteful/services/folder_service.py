"""
Noteful API: Folder Service
===========================

What:  List/get/create/update/delete for folders.
Who:   Called by the /folders route handlers.

Deleting a folder leaves its notes in place; the store sets their
folder_id to NULL (ON DELETE SET NULL).
"""

from noteful.models.folder import Folder
from noteful.schemas.folder import FolderResponse
from noteful.services.resource_base import NamedResourceService


class FolderService(NamedResourceService[Folder, FolderResponse]):
    model = Folder
    response_model = FolderResponse
    resource = "folder"


folder_service = FolderService()
