"""SQLite implementations of repository interfaces."""

import json
import logging
from datetime import datetime
from pathlib import Path

from .base import ClipNotFoundError, ClipRepository, ProgressRepository
from .connection import get_connection, DEFAULT_DB_PATH
from fsrs_scheduler import process_clip_review
from models import Clip, ClipProgress, FSRSState

logger = logging.getLogger(__name__)


class SQLiteClipRepository(ClipRepository):
    """SQLite implementation of ClipRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def get_all(self) -> list[Clip]:
        """Load all clips."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT * FROM clips ORDER BY level, id")
            return [self._row_to_model(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_by_id(self, clip_id: str) -> Clip | None:
        """Load a single clip by ID."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT * FROM clips WHERE id = ?", (clip_id,))
            row = cursor.fetchone()
            return self._row_to_model(row) if row else None
        finally:
            conn.close()

    def save_all(self, clips: list[Clip]) -> int:
        """Insert or replace clips."""
        conn = get_connection(self.db_path)
        try:
            for clip in clips:
                # Upsert keeps existing progress rows (REPLACE would cascade-delete them)
                conn.execute(
                    """INSERT INTO clips
                    (id, audio_id, level, genre, transcript, question, choices,
                     answer_index, explanation)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        audio_id = excluded.audio_id,
                        level = excluded.level,
                        genre = excluded.genre,
                        transcript = excluded.transcript,
                        question = excluded.question,
                        choices = excluded.choices,
                        answer_index = excluded.answer_index,
                        explanation = excluded.explanation""",
                    (
                        clip.id,
                        clip.audio_id,
                        clip.level,
                        clip.genre,
                        clip.transcript,
                        clip.question,
                        json.dumps(clip.choices, ensure_ascii=False),
                        clip.answer_index,
                        clip.explanation,
                    ),
                )
            conn.commit()
        finally:
            conn.close()
        logger.debug("saved %d clips to %s", len(clips), self.db_path)
        return len(clips)

    def _row_to_model(self, row) -> Clip:
        """Convert a database row to a Clip model."""
        return Clip(
            id=row["id"],
            audio_id=row["audio_id"],
            level=row["level"],
            genre=row["genre"],
            transcript=row["transcript"],
            question=row["question"],
            choices=json.loads(row["choices"]),
            answer_index=row["answer_index"],
            explanation=row["explanation"],
        )


class SQLiteProgressRepository(ProgressRepository):
    """SQLite implementation of ProgressRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def get(self, clip_id: str) -> ClipProgress:
        """Get progress for a clip, or empty progress if none is stored."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM clip_progress WHERE clip_id = ?", (clip_id,)
            )
            row = cursor.fetchone()
            return self._row_to_progress(row) if row else ClipProgress(clip_id=clip_id)
        finally:
            conn.close()

    def get_all(self) -> dict[str, ClipProgress]:
        """Get all stored progress keyed by clip ID."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT * FROM clip_progress")
            progress = {}
            for row in cursor.fetchall():
                item = self._row_to_progress(row)
                progress[item.clip_id] = item
            return progress
        finally:
            conn.close()

    def save(self, progress: ClipProgress) -> None:
        """Save/update progress for a single clip."""
        conn = get_connection(self.db_path)
        try:
            self._check_clip_exists(conn, progress.clip_id)
            fsrs_state = progress.fsrs_state
            conn.execute(
                """INSERT OR REPLACE INTO clip_progress
                (clip_id, attempts, corrects, last_played_at, is_bookmarked,
                 stability, difficulty, due, last_review, state, step)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    progress.clip_id,
                    progress.attempts,
                    progress.corrects,
                    progress.last_played_at.isoformat()
                    if progress.last_played_at
                    else None,
                    int(progress.is_bookmarked),
                    fsrs_state.stability if fsrs_state else None,
                    fsrs_state.difficulty if fsrs_state else None,
                    fsrs_state.due.isoformat()
                    if fsrs_state and fsrs_state.due
                    else None,
                    fsrs_state.last_review.isoformat()
                    if fsrs_state and fsrs_state.last_review
                    else None,
                    fsrs_state.state if fsrs_state else None,
                    fsrs_state.step if fsrs_state else None,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def record_answer(self, clip_id: str, is_correct: bool) -> ClipProgress:
        """Count an answer and schedule the clip's next review."""
        progress = self.get(clip_id)
        progress.attempts += 1
        if is_correct:
            progress.corrects += 1
        process_clip_review(progress, is_correct)
        self.save(progress)
        logger.debug(
            "recorded answer for %s (correct=%s, %d/%d)",
            clip_id,
            is_correct,
            progress.corrects,
            progress.attempts,
        )
        return progress

    def record_play(self, clip_id: str) -> ClipProgress:
        """Stamp the clip as played now."""
        progress = self.get(clip_id)
        progress.last_played_at = datetime.now()
        self.save(progress)
        return progress

    def toggle_bookmark(self, clip_id: str) -> bool:
        """Flip the clip's bookmark."""
        progress = self.get(clip_id)
        progress.is_bookmarked = not progress.is_bookmarked
        self.save(progress)
        return progress.is_bookmarked

    def _check_clip_exists(self, conn, clip_id: str) -> None:
        row = conn.execute("SELECT 1 FROM clips WHERE id = ?", (clip_id,)).fetchone()
        if row is None:
            raise ClipNotFoundError(f"Clip {clip_id} does not exist")

    def _row_to_progress(self, row) -> ClipProgress:
        """Convert a database row to a ClipProgress model."""
        fsrs_state = None
        # Only create FSRSState if we have any FSRS data
        if row["stability"] is not None or row["due"] is not None:
            fsrs_state = FSRSState(
                stability=row["stability"],
                difficulty=row["difficulty"],
                due=datetime.fromisoformat(row["due"]) if row["due"] else None,
                last_review=datetime.fromisoformat(row["last_review"])
                if row["last_review"]
                else None,
                state=row["state"] if row["state"] is not None else 1,
                step=row["step"],
            )

        return ClipProgress(
            clip_id=row["clip_id"],
            attempts=row["attempts"],
            corrects=row["corrects"],
            last_played_at=datetime.fromisoformat(row["last_played_at"])
            if row["last_played_at"]
            else None,
            is_bookmarked=bool(row["is_bookmarked"]),
            fsrs_state=fsrs_state,
        )
