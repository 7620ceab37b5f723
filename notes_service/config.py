"""
Notes Service — Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the database layer and the CLI entry point.
When:  Loaded once at module import time; validated before app starts.

Storage selection:
    DATABASE_URL wins when set. Otherwise DB_BACKEND picks between the
    embedded SQLite file (DB_PATH) and a networked PostgreSQL server
    (DB_HOST/DB_PORT/DB_USER/DB_PASS/DB_NAME).
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development against a
    SQLite file in the working directory.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Full async SQLAlchemy URL, e.g. postgresql+asyncpg://user:pw@host/db
    database_url: Optional[str] = Field(
        default=None,
        description="Overrides the backend-specific settings below when set",
    )

    # sqlite: embedded file database; postgresql: networked server
    db_backend: str = Field(default="sqlite")

    db_path: str = Field(default="./notesdb.sqlite")

    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="notes")
    db_pass: str = Field(default="")
    db_name: str = Field(default="notesdb")

    # Pool sizing for the networked backend; SQLite ignores these
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)
    # Seconds to wait for a free pooled connection before failing
    db_pool_timeout: int = Field(default=30, ge=1, le=300)

    @field_validator("db_backend")
    @classmethod
    def validate_db_backend(cls, v: str) -> str:
        """Accepts only the storage backends the service ships drivers for."""
        valid = {"sqlite", "postgresql"}
        lower = v.lower()
        if lower not in valid:
            raise ValueError(f"Invalid db_backend '{v}'. Must be one of: {valid}")
        return lower

    @property
    def sqlalchemy_url(self) -> str:
        """
        What: The async SQLAlchemy URL the storage client connects with.
        Why URL.create: Escapes credentials that contain '@', ':' or '/'.
        """
        if self.database_url:
            return self.database_url
        if self.db_backend == "postgresql":
            return URL.create(
                "postgresql+asyncpg",
                username=self.db_user,
                password=self.db_pass or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            ).render_as_string(hide_password=False)
        return f"sqlite+aiosqlite:///{self.db_path}"

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any front-end to call the API
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Static Assets ─────────────────────────────────────────────────────
    # Front-end bundle served at "/" when the directory exists
    static_dir: str = Field(default="./public")

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance; create_app() accepts an explicit Settings for tests
settings = Settings()
