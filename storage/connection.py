"""Database connection management and schema initialization."""

import logging
import sqlite3
from pathlib import Path

from models import CONTENT_VERSION

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "tutor.db"

SCHEMA_SQL = """
-- Listening clips
CREATE TABLE IF NOT EXISTS clips (
    id TEXT PRIMARY KEY,
    audio_id TEXT,
    level INTEGER NOT NULL CHECK (level >= 1),
    genre TEXT NOT NULL,
    transcript TEXT NOT NULL,
    question TEXT NOT NULL,
    choices TEXT NOT NULL DEFAULT '[]',  -- JSON array of strings
    answer_index INTEGER NOT NULL,
    explanation TEXT NOT NULL DEFAULT ''
);

CREATE INDEX IF NOT EXISTS idx_clips_level ON clips(level);
CREATE INDEX IF NOT EXISTS idx_clips_genre ON clips(genre);

-- Learner progress per clip, including FSRS card state
CREATE TABLE IF NOT EXISTS clip_progress (
    clip_id TEXT PRIMARY KEY,
    attempts INTEGER NOT NULL DEFAULT 0,
    corrects INTEGER NOT NULL DEFAULT 0,
    last_played_at TEXT,
    is_bookmarked INTEGER NOT NULL DEFAULT 0,
    stability REAL,
    difficulty REAL,
    due TEXT,
    last_review TEXT,
    state INTEGER,
    step INTEGER,
    FOREIGN KEY (clip_id) REFERENCES clips(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_clip_progress_due ON clip_progress(due);

-- Key/value metadata (content version)
CREATE TABLE IF NOT EXISTS meta (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with appropriate settings.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A configured sqlite3 Connection object.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_schema(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    # Ensure the parent directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()


def get_content_version(db_path: Path = DEFAULT_DB_PATH) -> int:
    """Return the stored content version, 0 if none has been recorded."""
    conn = get_connection(db_path)
    try:
        row = conn.execute(
            "SELECT value FROM meta WHERE key = 'content_version'"
        ).fetchone()
        return int(row["value"]) if row else 0
    finally:
        conn.close()


def migrate_if_needed(
    db_path: Path = DEFAULT_DB_PATH, content_version: int = CONTENT_VERSION
) -> bool:
    """Clear stale progress when the clip content version has moved on.

    Returns:
        True if progress was cleared.
    """
    saved = get_content_version(db_path)
    if saved >= content_version:
        return False

    conn = get_connection(db_path)
    try:
        conn.execute("DELETE FROM clip_progress")
        conn.execute(
            "INSERT OR REPLACE INTO meta (key, value) VALUES ('content_version', ?)",
            (str(content_version),),
        )
        conn.commit()
    finally:
        conn.close()

    logger.info(
        "content version %d -> %d, clip progress cleared", saved, content_version
    )
    return True
