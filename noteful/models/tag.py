"""
Noteful API: Tag Model
======================

What:  ORM model for the `tags` table.
Who:   Used by TagService; linked to notes through notes_tags.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


class Tag(Base):
    """A label that can be attached to any number of notes."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the tag",
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
