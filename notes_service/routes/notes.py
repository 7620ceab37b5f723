"""
Notes Service — Notes Route Handlers
======================================

What:  CRUD endpoints under /api/notes.
How:   Each handler takes a request-scoped session from get_db_session,
       delegates to NoteService and lets the global exception handlers in
       main.py render failures as `{"error": ...}`.

`note_id` is an opaque string path parameter: malformed ids are not a 422,
they simply match nothing and yield 404.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notes_service.database import get_db_session
from notes_service.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreatedResponse,
    NoteResponse,
    NoteWrite,
)
from notes_service.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Storage failure", "model": ErrorResponse}},
    summary="List all notes, most recently updated first",
)
async def list_notes(db: AsyncSession = Depends(get_db_session)) -> List[NoteResponse]:
    return await note_service.list_notes(db)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Get a single note by id",
)
async def get_note(note_id: str, db: AsyncSession = Depends(get_db_session)) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteCreatedResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteWrite,
    db: AsyncSession = Depends(get_db_session),
) -> NoteCreatedResponse:
    return await note_service.create_note(db, payload)


@router.put(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: str,
    payload: NoteWrite,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await note_service.update_note(db, note_id, payload)


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Delete a note permanently",
)
async def delete_note(note_id: str, db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    return await note_service.delete_note(db, note_id)
