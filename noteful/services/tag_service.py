"""
Noteful API: Tag Service
========================

What:  List/get/create/update/delete for tags.
Who:   Called by the /tags route handlers.

Deleting a tag removes its notes_tags rows (ON DELETE CASCADE); the notes
themselves are untouched.
"""

from noteful.models.tag import Tag
from noteful.schemas.tag import TagResponse
from noteful.services.resource_base import NamedResourceService


class TagService(NamedResourceService[Tag, TagResponse]):
    model = Tag
    response_model = TagResponse
    resource = "tag"


tag_service = TagService()
