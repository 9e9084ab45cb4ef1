"""Create folders, tags, notes and notes_tags

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Initial schema: folders(id, name), tags(id, name),
       notes(id, title, content, folder_id) and the notes_tags join table.

Referential actions:
    notes.folder_id    → folders.id ON DELETE SET NULL
    notes_tags.note_id → notes.id   ON DELETE CASCADE
    notes_tags.tag_id  → tags.id    ON DELETE CASCADE

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "folders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False, comment="Display name of the folder"),
        sa.PrimaryKeyConstraint("id", name="pk_folders"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False, comment="Display name of the tag"),
        sa.PrimaryKeyConstraint("id", name="pk_tags"),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "title",
            sa.String(255),
            nullable=False,
            comment="Note title; searchable through the `searchTerm` filter",
        ),
        sa.Column("content", sa.Text(), nullable=True, comment="Free-form note body"),
        sa.Column(
            "folder_id",
            sa.Integer(),
            nullable=True,
            comment="Owning folder; NULL when the note is not filed",
        ),
        sa.ForeignKeyConstraint(
            ["folder_id"],
            ["folders.id"],
            name="fk_notes_folder_id_folders",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_notes"),
    )
    op.create_index("ix_notes_folder_id", "notes", ["folder_id"])

    op.create_table(
        "notes_tags",
        sa.Column("note_id", sa.Integer(), nullable=False),
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["note_id"],
            ["notes.id"],
            name="fk_notes_tags_note_id_notes",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["tag_id"],
            ["tags.id"],
            name="fk_notes_tags_tag_id_tags",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("note_id", "tag_id", name="pk_notes_tags"),
    )
    # The composite primary key already serves lookups by note_id
    op.create_index("ix_notes_tags_tag_id", "notes_tags", ["tag_id"])


def downgrade() -> None:
    op.drop_index("ix_notes_tags_tag_id", table_name="notes_tags")
    op.drop_table("notes_tags")
    op.drop_index("ix_notes_folder_id", table_name="notes")
    op.drop_table("notes")
    op.drop_table("tags")
    op.drop_table("folders")
