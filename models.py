from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, model_validator

import fsrs

GENRE_ALL = "All"

# Bump when clip content is replaced; stored progress older than this is reset.
CONTENT_VERSION = 2


class ClipStatus(str, Enum):
    NEW = "new"
    REVIEW = "review"  # attempted, never answered correctly
    CORRECT = "correct"


class StatusFilter(str, Enum):
    """Library status filter choices; BOOKMARKED is orthogonal to ClipStatus."""

    ALL = "all"
    NEW = "new"
    CORRECT = "correct"
    REVIEW = "review"
    BOOKMARKED = "bookmarked"


# ============================================================================
# Clip Models
# ============================================================================


class Clip(BaseModel):
    """A short listening clip with its transcript and comprehension question."""

    id: str
    audio_id: str | None = None  # e.g. LibriSpeech id "2412-153954-0019"
    level: int = Field(ge=1)
    genre: str
    transcript: str
    question: str
    choices: list[str]
    answer_index: int = Field(ge=0)
    explanation: str = ""

    @model_validator(mode="after")
    def _answer_in_choices(self) -> "Clip":
        if self.answer_index >= len(self.choices):
            raise ValueError(
                f"answer_index {self.answer_index} out of range for "
                f"{len(self.choices)} choices"
            )
        return self

    @property
    def correct_choice(self) -> str:
        return self.choices[self.answer_index]

    @property
    def difficulty(self) -> float:
        """Exercise difficulty in [0, 1], derived from the level."""
        return min(self.level / 3, 1.0)


# ============================================================================
# FSRS and Progress Models
# ============================================================================


class FSRSState(BaseModel):
    """
    Stores FSRS card state. These fields mirror the py-fsrs Card class
    but are stored as primitives for JSON serialization with Pydantic.
    """

    stability: float | None = None
    difficulty: float | None = None
    due: datetime | None = None
    last_review: datetime | None = None
    state: int = 1  # 1=Learning, 2=Review, 3=Relearning
    step: int | None = 0  # Learning step (None when in Review state)


class ClipProgress(BaseModel):
    """Per-clip learner progress."""

    clip_id: str
    attempts: int = Field(default=0, ge=0)
    corrects: int = Field(default=0, ge=0)
    last_played_at: datetime | None = None
    is_bookmarked: bool = False
    fsrs_state: FSRSState | None = None

    @property
    def correct_rate(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.corrects / self.attempts

    @property
    def has_progress(self) -> bool:
        return self.attempts > 0

    @property
    def has_correct(self) -> bool:
        return self.corrects > 0

    @property
    def status(self) -> ClipStatus:
        if self.has_correct:
            return ClipStatus.CORRECT
        if self.has_progress:
            return ClipStatus.REVIEW
        return ClipStatus.NEW

    @property
    def due_date(self) -> datetime | None:
        """
        Get the due date for the clip's next review.
        Returns None if FSRS state not initialized.
        """
        if self.fsrs_state is None:
            return None
        return self.fsrs_state.due

    @property
    def is_due(self) -> bool:
        """Never-reviewed clips are always due."""
        if self.due_date is None:
            return True

        now = datetime.now(timezone.utc)
        if self.due_date.tzinfo is None:
            due_utc = self.due_date.replace(tzinfo=timezone.utc)
        else:
            due_utc = self.due_date

        return now >= due_utc


def rating_for(is_correct: bool) -> fsrs.Rating:
    """Map a binary answer to an FSRS rating."""
    return fsrs.Rating.Good if is_correct else fsrs.Rating.Again
