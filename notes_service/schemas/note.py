"""
Notes Service — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract with clients.
Why:   Typed request parsing, response serialization and OpenAPI docs.
How:   FastAPI validates request bodies against these models and serializes
       the service's return values through the declared response models.

Design Decision:
    NoteWrite accepts absent fields (None) on purpose. A missing title must
    produce the API's own 400 `{"error": "Title and content are required"}`
    rather than FastAPI's generic 422, so presence and non-emptiness are
    checked by the service via `missing_fields()`.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """Body of POST /api/notes and PUT /api/notes/{id}."""

    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body (required, non-empty)")

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty, in declaration order."""
        return [name for name in ("title", "content") if not getattr(self, name)]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note; items of GET /api/notes and GET /api/notes/{id}."""

    id: str = Field(description="Opaque unique note identifier")
    title: str
    content: str
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last written (UTC ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; they were stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class NoteCreatedResponse(BaseModel):
    """Returned by POST /api/notes with HTTP 201."""

    id: str
    title: str
    content: str
    message: str = Field(default="Note created successfully")


class MessageResponse(BaseModel):
    """Returned by successful PUT and DELETE."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Liveness probe payload; produced without touching storage."""

    status: str = Field(default="healthy")
    timestamp: datetime = Field(description="Current server time (UTC)")
    version: str
    uptime_seconds: float = Field(description="Seconds since the process started")
