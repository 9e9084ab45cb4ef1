"""
Noteful API: Note Service
=========================

What:  Note CRUD with folder/tag joins, list filters and tag-set replacement.
How:   Reads go through one joined select whose rows are folded by
       hydrate_notes(); writes touch `notes` through the ORM and
       `notes_tags` through Core statements.
Who:   Called by the /notes route handlers.

Read query (list and detail):
    SELECT notes.id, notes.title, notes.content,
           notes.folder_id AS folderId, folders.name AS folderName,
           tags.id AS tagId, tags.name AS tagName
    FROM notes
    LEFT JOIN folders    ON notes.folder_id = folders.id
    LEFT JOIN notes_tags ON notes.id = notes_tags.note_id
    LEFT JOIN tags       ON notes_tags.tag_id = tags.id
    [WHERE ...filters]
    ORDER BY notes.id, tags.id

Write ordering (update):
    1. UPDATE notes (title/content/folder_id present in the body)
    2. DELETE FROM notes_tags WHERE note_id = :id
    3. INSERT INTO notes_tags one row per tag id
    4. Re-read with the joined select and hydrate

    All four steps share the request's session, so get_db_session commits
    them together or rolls all of them back.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import Select, delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, NotFoundError, ValidationError
from noteful.models.folder import Folder
from noteful.models.note import Note, notes_tags
from noteful.models.tag import Tag
from noteful.schemas.note import NoteResponse, NoteWrite
from noteful.services.hydration import hydrate_notes

logger = logging.getLogger(__name__)


def hydrated_note_query() -> Select:
    """The joined select whose rows hydrate_notes() expects."""
    return (
        select(
            Note.id,
            Note.title,
            Note.content,
            Note.folder_id.label("folderId"),
            Folder.name.label("folderName"),
            Tag.id.label("tagId"),
            Tag.name.label("tagName"),
        )
        .select_from(Note)
        .outerjoin(Folder, Note.folder_id == Folder.id)
        .outerjoin(notes_tags, Note.id == notes_tags.c.note_id)
        .outerjoin(Tag, notes_tags.c.tag_id == Tag.id)
        .order_by(Note.id, Tag.id)
    )


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): filtered, hydrated listing
        - get_note(): single hydrated note or NotFoundError
        - create_note(): insert note + join rows, return hydrated note
        - update_note(): update scalars, replace join rows, return hydrated note
        - delete_note(): idempotent delete

    Error Handling Strategy:
        Missing `title` → ValidationError before any query runs.
        A folderId or tag id that does not exist trips a foreign key and is
        reported as ValidationError. Every other SQLAlchemyError is wrapped in
        DatabaseError with the original chained.
    """

    updatable_fields = ("title", "content", "folder_id")

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_notes(
        self,
        db: AsyncSession,
        search_term: Optional[str] = None,
        folder_id: Optional[int] = None,
        tag_id: Optional[int] = None,
    ) -> List[NoteResponse]:
        """
        List hydrated notes, optionally filtered.

        Filters combine with AND:
            search_term → notes.title LIKE '%term%' (wildcards in the term are escaped)
            folder_id   → notes.folder_id = :folder_id
            tag_id      → notes_tags.tag_id = :tag_id on the joined rows, so a
                          matching note carries only that tag
        """
        query = hydrated_note_query()
        if search_term:
            query = query.where(Note.title.contains(search_term, autoescape=True))
        if folder_id is not None:
            query = query.where(Note.folder_id == folder_id)
        if tag_id is not None:
            query = query.where(notes_tags.c.tag_id == tag_id)

        try:
            result = await db.execute(query)
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [NoteResponse.model_validate(note) for note in hydrate_notes(rows)]

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        note = await self._fetch_hydrated(db, note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    async def _fetch_hydrated(self, db: AsyncSession, note_id: int) -> Optional[NoteResponse]:
        try:
            result = await db.execute(hydrated_note_query().where(Note.id == note_id))
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        notes = hydrate_notes(rows)
        if not notes:
            return None
        return NoteResponse.model_validate(notes[0])

    # ── Writes ────────────────────────────────────────────────────────────

    @staticmethod
    def _require_title(title: Optional[str]) -> str:
        if not title:
            raise ValidationError.missing_field("title")
        return title

    async def _insert_tags(self, db: AsyncSession, note_id: int, tag_ids: Sequence[int]) -> None:
        if not tag_ids:
            return
        await db.execute(
            insert(notes_tags),
            [{"note_id": note_id, "tag_id": tag_id} for tag_id in tag_ids],
        )

    @staticmethod
    def _reference_error(note_id: Optional[int], error: IntegrityError) -> ValidationError:
        logger.warning("Integrity error writing note %s: %s", note_id, str(error))
        return ValidationError(
            message="`folderId` or `tags` refers to a folder or tag that does not exist",
            context={"note_id": note_id},
        )

    async def create_note(self, db: AsyncSession, payload: NoteWrite) -> NoteResponse:
        """
        Insert a note and its tag links, then return it hydrated.

        Steps:
            1. Validate `title`
            2. INSERT INTO notes, flush to obtain the generated id
            3. INSERT one notes_tags row per distinct tag id
            4. Re-read with joins and hydrate
        """
        title = self._require_title(payload.title)
        note = Note(title=title, content=payload.content, folder_id=payload.folder_id)

        try:
            db.add(note)
            await db.flush()  # Assigns the id without committing
            await self._insert_tags(db, note.id, payload.tag_ids())
        except IntegrityError as e:
            raise self._reference_error(note.id, e) from e
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Created note %s with %d tag(s)", note.id, len(payload.tag_ids()))
        return await self.get_note(db, note.id)

    async def update_note(self, db: AsyncSession, note_id: int, payload: NoteWrite) -> NoteResponse:
        """
        Update a note's scalar fields and replace its tag set.

        Only `title`, `content` and `folder_id` present in the body are
        written; `title` must be among them. The tag set is always replaced
        by `tags` (absent or null → no tags).
        """
        provided = payload.model_dump(exclude_unset=True)
        update_set = {
            field: provided[field] for field in self.updatable_fields if field in provided
        }
        self._require_title(update_set.get("title"))

        try:
            note = await db.get(Note, note_id)
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_id)

            for field, value in update_set.items():
                setattr(note, field, value)
            await db.flush()

            await db.execute(delete(notes_tags).where(notes_tags.c.note_id == note_id))
            await self._insert_tags(db, note_id, payload.tag_ids())
        except IntegrityError as e:
            raise self._reference_error(note_id, e) from e
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Updated note %s", note_id)
        return await self.get_note(db, note_id)

    async def delete_note(self, db: AsyncSession, note_id: int) -> bool:
        """Delete a note and its tag links. Deleting a missing id is not an error."""
        try:
            await db.execute(delete(notes_tags).where(notes_tags.c.note_id == note_id))
            result = await db.execute(delete(Note).where(Note.id == note_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        removed = bool(result.rowcount)
        logger.info("Deleted note %s (existed=%s)", note_id, removed)
        return removed


note_service = NoteService()
