"""Storage layer for the listening tutor.

Provides repository interfaces and SQLite implementations for persisting
clips and learner progress, plus the JSON clip importer.
"""

from pathlib import Path

from .base import (
    ClipNotFoundError,
    ClipRepository,
    ProgressRepository,
)
from .sqlite import (
    SQLiteClipRepository,
    SQLiteProgressRepository,
)
from .connection import (
    DEFAULT_DB_PATH,
    get_connection,
    get_content_version,
    init_schema,
    migrate_if_needed,
)
from .importer import import_clips, load_clips_json

__all__ = [
    # Abstract interfaces
    "ClipRepository",
    "ProgressRepository",
    "ClipNotFoundError",
    # SQLite implementations
    "SQLiteClipRepository",
    "SQLiteProgressRepository",
    # Connection utilities
    "get_connection",
    "init_schema",
    "get_content_version",
    "migrate_if_needed",
    "DEFAULT_DB_PATH",
    # Import
    "load_clips_json",
    "import_clips",
    # Factory functions
    "get_clip_repo",
    "get_progress_repo",
]


def get_clip_repo(db_path: Path = DEFAULT_DB_PATH) -> ClipRepository:
    """Get a ClipRepository instance."""
    return SQLiteClipRepository(db_path)


def get_progress_repo(db_path: Path = DEFAULT_DB_PATH) -> ProgressRepository:
    """Get a ProgressRepository instance."""
    return SQLiteProgressRepository(db_path)
