"""Exercise models shared by generators, handlers and the session.

These models know nothing about audio or storage. They describe what is
presented to the learner and what counts as the right answer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenericExercise(BaseModel):
    """Base class for all generic exercises."""

    id: str
    source_ids: list[str]  # Clip IDs for progress tracking
    difficulty: float = Field(ge=0.0, le=1.0)
    metadata: dict[str, Any] = Field(default_factory=dict)


class ClozeToken(BaseModel):
    """A transcript token, possibly blanked out.

    ``blank_order`` is the token's 0-based rank among blanks in transcript
    order, or -1 for tokens that are shown as-is.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    word: str
    is_blank: bool = False
    blank_order: int = -1


class IndexedToken(BaseModel):
    """A pool entry: a blank's stable identity paired with its text."""

    model_config = ConfigDict(frozen=True)

    id: int  # blank order, unique within a session
    token: str


class ClozeExercise(GenericExercise):
    """Word-order / cloze exercise over a transcript.

    Covers both variants:
    - Cloze: some tokens are blanks, filled in transcript order
    - Full reorder: every token is a blank
    """

    transcript: str
    level: int
    tokens: list[ClozeToken]
    full_reorder: bool = False

    @property
    def answer(self) -> list[str]:
        """Blank words in transcript order."""
        return [t.word for t in self.tokens if t.is_blank]

    @property
    def blank_count(self) -> int:
        return sum(1 for t in self.tokens if t.is_blank)

    def pool_entries(self) -> list[IndexedToken]:
        """Pool entries for every blank, in transcript order."""
        return [
            IndexedToken(id=t.blank_order, token=t.word)
            for t in self.tokens
            if t.is_blank
        ]


class MultipleChoiceExercise(GenericExercise):
    """Generic multiple choice: pick one option from a list.

    Used for the comprehension question attached to each clip.
    """

    prompt: str  # Main question text
    options: list[str]  # Answer choices
    correct_index: int  # Index of correct answer
    explanation: str = ""
