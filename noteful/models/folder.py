"""
Noteful API: Folder Model
=========================

What:  ORM model for the `folders` table.
Who:   Used by FolderService and joined into note queries for `folderName`.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


class Folder(Base):
    """A named container a note may belong to (notes.folder_id)."""

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the folder",
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
