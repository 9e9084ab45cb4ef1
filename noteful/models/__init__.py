"""
Noteful API: SQLAlchemy Models
==============================

Importing this package registers every table on Base.metadata, which is what
Alembic autogenerate and the test fixtures rely on.
"""

from noteful.models.folder import Folder
from noteful.models.tag import Tag
from noteful.models.note import Note, notes_tags

__all__ = ["Folder", "Tag", "Note", "notes_tags"]
