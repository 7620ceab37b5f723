"""
Notes Service — Note SQLAlchemy Model
=======================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from the shared DeclarativeBase; `Database.create_schema()`
       creates the table from this metadata at startup.
Who:   Used by NoteService for every CRUD operation.

Table Design Rationale:
    - String(36) primary key: textual UUID4 works the same on SQLite and
      PostgreSQL, and clients treat it as an opaque string
    - title / content: NOT NULL; emptiness is rejected by the service before
      any statement is issued
    - created_at / updated_at: both assigned by the service in UTC, never by
      database defaults, so both backends behave identically

    Index on updated_at DESC:
        Backs the only list ordering ("most recently touched first")
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notes_service.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_note_id() -> str:
    """128-bit random identifier, formatted as a canonical UUID string."""
    return str(uuid.uuid4())


class Note(Base):
    """
    Represents a single text note.

    Lifecycle:
        1. Created by POST /api/notes (id and both timestamps assigned)
        2. Updated in place by PUT (title, content, updated_at)
        3. Deleted permanently by DELETE; no tombstone is kept
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_note_id,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Text: no artificial length limit on note bodies
    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_notes_updated_at", updated_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, updated_at='{self.updated_at}')>"
