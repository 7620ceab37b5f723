"""
Notes Service — Settings and Schema Tests
===========================================

What:  Storage URL selection, settings validation and the request/response
       models' own rules.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from notes_service.config import Settings
from notes_service.schemas.note import NoteResponse, NoteWrite


class TestSettings:

    def test_defaults_to_sqlite_file(self):
        settings = Settings(database_url=None, db_backend="sqlite", db_path="./notesdb.sqlite")

        assert settings.sqlalchemy_url == "sqlite+aiosqlite:///./notesdb.sqlite"

    def test_database_url_overrides_backend(self):
        settings = Settings(
            database_url="postgresql+asyncpg://u:p@db/notes",
            db_backend="sqlite",
        )

        assert settings.sqlalchemy_url == "postgresql+asyncpg://u:p@db/notes"

    def test_postgresql_url_built_from_parts(self):
        settings = Settings(
            database_url=None,
            db_backend="PostgreSQL",
            db_host="db.internal",
            db_port=5433,
            db_user="notes",
            db_pass="p@ss:word",
            db_name="notesdb",
        )

        url = settings.sqlalchemy_url
        assert url.startswith("postgresql+asyncpg://notes:")
        assert "p%40ss%3Aword" in url
        assert url.endswith("@db.internal:5433/notesdb")

    def test_invalid_backend_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(db_backend="oracle")

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")

        assert Settings().port == 8080


class TestNoteWrite:

    @pytest.mark.parametrize(
        "payload, missing",
        [
            ({}, ["title", "content"]),
            ({"title": "t"}, ["content"]),
            ({"content": "c"}, ["title"]),
            ({"title": "", "content": ""}, ["title", "content"]),
            ({"title": "t", "content": "c"}, []),
        ],
    )
    def test_missing_fields(self, payload, missing):
        assert NoteWrite(**payload).missing_fields() == missing

    def test_whitespace_counts_as_present(self):
        assert NoteWrite(title=" ", content="c").missing_fields() == []


class TestNoteResponse:

    def test_naive_timestamps_are_utc(self):
        naive = datetime(2024, 1, 15, 12, 0)

        note = NoteResponse(id="x", title="t", content="c", created_at=naive, updated_at=naive)

        assert note.created_at.tzinfo == timezone.utc
        assert note.updated_at == naive.replace(tzinfo=timezone.utc)
