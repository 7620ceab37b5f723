"""
Notes Service — Note Service (Business Logic)
===============================================

What:  The note lifecycle: list, get, create, update, delete.
Why:   Encapsulates validation, identity/timestamp assignment and error
       translation in one place, independent of HTTP concerns.
How:   Each operation validates its input first, then issues exactly one SQL
       statement on the session it was given.
Who:   Called by route handlers in routes/notes.py.

Lifecycle per id:
    {absent} --create--> {exists} --update--> {exists} --delete--> {absent}

    Update/delete on an absent id is detected from the affected row count of
    the statement itself (no pre-read) and reported as NotFoundError.

Design Decision:
    NoteService is stateless; it receives the session for each call. Two
    concurrent updates of one note race in the database and the last write
    wins.
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notes_service.exceptions import DatabaseError, NotFoundError, ValidationError
from notes_service.models.note import Note, new_note_id, utcnow
from notes_service.schemas.note import (
    MessageResponse,
    NoteCreatedResponse,
    NoteResponse,
    NoteWrite,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Title and content are required"


def _storage_error(action: str, exc: Exception, **context) -> DatabaseError:
    """
    Wrap a storage failure, keeping the driver's message.

    SQLAlchemy wraps DBAPI errors in its own exception whose str() embeds the
    SQL statement; the original driver exception is on `.orig`.
    """
    original = getattr(exc, "orig", None) or exc
    logger.error("Database error %s: %s", action, exc, exc_info=True)
    context["error_type"] = type(original).__name__
    return DatabaseError(message=str(original) or type(original).__name__, context=context)


def _require_fields(payload: NoteWrite) -> None:
    missing = payload.missing_fields()
    if missing:
        raise ValidationError(message=REQUIRED_FIELDS_MESSAGE, fields=missing)


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        Missing/empty fields raise ValidationError before any statement runs.
        Absent ids raise NotFoundError. Everything else that escapes the
        session is wrapped in DatabaseError.
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        All notes, most recently updated first.

        Query plan:
            SELECT * FROM notes ORDER BY updated_at DESC
            → idx_notes_updated_at
        """
        try:
            result = await db.execute(select(Note).order_by(Note.updated_at.desc()))
            notes = result.scalars().all()
        except Exception as e:
            raise _storage_error("listing notes", e)

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: No note with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except Exception as e:
            raise _storage_error("fetching note", e, note_id=note_id)

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteWrite) -> NoteCreatedResponse:
        """
        Persist a new note.

        What:    Assigns a fresh random id and sets created_at == updated_at.
        How:     One INSERT. The id is never checked for existence; a
                 collision would violate the primary key and surface as a
                 DatabaseError rather than overwrite anything.

        Raises:
            ValidationError: Title or content missing/empty (→ 400, no write)
            DatabaseError: INSERT or commit failed (→ 500)
        """
        _require_fields(payload)

        now = utcnow()
        note = Note(
            id=new_note_id(),
            title=payload.title,
            content=payload.content,
            created_at=now,
            updated_at=now,
        )

        try:
            db.add(note)
            await db.commit()
        except Exception as e:
            raise _storage_error("creating note", e)

        logger.info("Note created: %s", note.id)
        return NoteCreatedResponse(id=note.id, title=note.title, content=note.content)

    async def update_note(
        self, db: AsyncSession, note_id: str, payload: NoteWrite
    ) -> MessageResponse:
        """
        Overwrite title and content, refresh updated_at.

        id and created_at are never part of the SET clause.

        Raises:
            ValidationError: Title or content missing/empty (→ 400, no write)
            NotFoundError: Zero rows affected (→ 404)
            DatabaseError: UPDATE or commit failed (→ 500)
        """
        _require_fields(payload)

        statement = (
            update(Note)
            .where(Note.id == note_id)
            .values(title=payload.title, content=payload.content, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )

        try:
            result = await db.execute(statement)
            affected = result.rowcount
            if affected:
                await db.commit()
        except Exception as e:
            raise _storage_error("updating note", e, note_id=note_id)

        if not affected:
            raise NotFoundError(resource="Note", resource_id=note_id)

        logger.info("Note updated: %s", note_id)
        return MessageResponse(message="Note updated successfully")

    async def delete_note(self, db: AsyncSession, note_id: str) -> MessageResponse:
        """
        Permanently remove a note.

        Raises:
            NotFoundError: Zero rows affected (→ 404)
            DatabaseError: DELETE or commit failed (→ 500)
        """
        statement = (
            delete(Note)
            .where(Note.id == note_id)
            .execution_options(synchronize_session=False)
        )

        try:
            result = await db.execute(statement)
            affected = result.rowcount
            if affected:
                await db.commit()
        except Exception as e:
            raise _storage_error("deleting note", e, note_id=note_id)

        if not affected:
            raise NotFoundError(resource="Note", resource_id=note_id)

        logger.info("Note deleted: %s", note_id)
        return MessageResponse(message="Note deleted successfully")


# Stateless; one shared instance
note_service = NoteService()
