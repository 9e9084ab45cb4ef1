"""
Noteful API: Note Model and notes_tags Association Table
========================================================

What:  ORM model for the `notes` table plus the `notes_tags` join table that
       realizes the many-to-many relation between notes and tags.
Who:   Used by NoteService for writes and for the joined read query that
       feeds hydration.

Referential actions:
    notes.folder_id     → folders.id  ON DELETE SET NULL (note survives, loses folder)
    notes_tags.note_id  → notes.id    ON DELETE CASCADE
    notes_tags.tag_id   → tags.id     ON DELETE CASCADE

Query Patterns:
    - List notes: notes ⟕ folders ⟕ notes_tags ⟕ tags ORDER BY notes.id
      → one row per (note, tag) pair, or one row with NULL tag columns
    - Filter by folder: WHERE notes.folder_id = :folder_id
      → uses ix_notes_folder_id
    - Filter by tag: WHERE notes_tags.tag_id = :tag_id on the joined rows
      → uses ix_notes_tags_tag_id
"""

from typing import Optional

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


# ── Association Table ─────────────────────────────────────────────────────
# Composite primary key; rows have no identity of their own and are replaced
# wholesale whenever a note's tag set is written.
notes_tags = Table(
    "notes_tags",
    Base.metadata,
    Column(
        "note_id",
        Integer,
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("ix_notes_tags_tag_id", "tag_id"),
)


class Note(Base):
    """
    A note with a title, optional content and an optional folder.

    Tags are not mapped as a relationship: the read path always goes through
    the joined select + hydrate_notes(), and writes touch notes_tags directly.
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Note title; searchable through the `searchTerm` filter",
    )

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Free-form note body",
    )

    folder_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
        comment="Owning folder; NULL when the note is not filed",
    )

    __table_args__ = (
        Index("ix_notes_folder_id", "folder_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', folder_id={self.folder_id})>"
