"""Interactive state for a cloze / word-order exercise.

The session owns the pool of not-yet-placed blank tokens and the learner's
selection. Every pick is validated against the answer as a prefix; a wrong
pick blocks further picks until the learner undoes or resets.

States:
- IN_PROGRESS: picks accepted
- WRONG: last pick failed the prefix check; picks rejected
- COMPLETE: selection equals the answer; picks rejected
"""

import logging
import random
from collections.abc import Callable
from enum import Enum

from exercises.cloze import shuffled
from exercises.config import ClozeConfig
from exercises.generators import ClozeGenerator
from exercises.generic_models import ClozeExercise, ClozeToken, IndexedToken
from exercises.validation import PrefixResult, check_prefix

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WRONG = "wrong"
    COMPLETE = "complete"


class SessionEvent(str, Enum):
    SELECTED = "selected"
    WRONG = "wrong"
    COMPLETED = "completed"
    UNDONE = "undone"
    RESET = "reset"


SessionListener = Callable[["ExerciseSession", SessionEvent], None]


class ExerciseSession:
    """Drives one cloze exercise from setup to completion."""

    def __init__(
        self,
        exercise: ClozeExercise,
        rng: random.Random | None = None,
        on_complete: Callable[[], None] | None = None,
        shuffle_pool: bool = True,
    ):
        self.exercise = exercise
        self.rng = rng or random.Random()
        self._on_complete = on_complete
        self._shuffle_pool = shuffle_pool
        self._listeners: list[SessionListener] = []

        self._answer = exercise.answer
        entries = exercise.pool_entries()
        self._pool: list[IndexedToken] = (
            shuffled(entries, self.rng) if shuffle_pool else entries
        )
        self._selected: list[IndexedToken] = []
        self._status = SessionStatus.IN_PROGRESS
        self._wrong_index: int | None = None

        # Nothing to fill in: the empty selection is already the answer
        if not self._answer:
            self._apply(check_prefix([], self._answer))

    @classmethod
    def new(
        cls,
        transcript: str,
        level: int,
        *,
        config: ClozeConfig | None = None,
        rng: random.Random | None = None,
        on_complete: Callable[[], None] | None = None,
        full_reorder: bool = False,
        source_id: str | None = None,
    ) -> "ExerciseSession":
        """Build an exercise from a transcript and start a session on it."""
        config = config or ClozeConfig()
        exercise = ClozeGenerator(config).generate(
            transcript, level, full_reorder=full_reorder, source_id=source_id
        )
        return cls(
            exercise,
            rng=rng,
            on_complete=on_complete,
            shuffle_pool=config.shuffle_pool,
        )

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def tokens(self) -> list[ClozeToken]:
        return self.exercise.tokens

    @property
    def answer(self) -> list[str]:
        return list(self._answer)

    @property
    def pool(self) -> list[IndexedToken]:
        return list(self._pool)

    @property
    def selected(self) -> list[IndexedToken]:
        return list(self._selected)

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def wrong_index(self) -> int | None:
        """Position in the selection to highlight as wrong, if any."""
        return self._wrong_index

    @property
    def is_complete(self) -> bool:
        return self._status == SessionStatus.COMPLETE

    @property
    def can_select(self) -> bool:
        return self._status == SessionStatus.IN_PROGRESS

    @property
    def can_undo(self) -> bool:
        return bool(self._selected) and not self.is_complete

    @property
    def can_reset(self) -> bool:
        return bool(self._selected) and not self.is_complete

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback invoked with every state change."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def select_token(self, entry: IndexedToken) -> PrefixResult | None:
        """Move ``entry`` from the pool to the end of the selection.

        Returns:
            The prefix check result, or None if the pick was rejected
            because the session is WRONG or COMPLETE.

        Raises:
            ValueError: If ``entry`` is not currently in the pool.
        """
        if not self.can_select:
            logger.debug("pick of %r rejected in state %s", entry.token, self._status)
            return None

        if entry not in self._pool:
            raise ValueError(f"Token {entry.id} ({entry.token!r}) is not in the pool")

        self._pool.remove(entry)
        self._selected.append(entry)

        result = check_prefix([e.token for e in self._selected], self._answer)
        self._apply(result)
        return result

    def select_by_id(self, token_id: int) -> PrefixResult | None:
        """Select the pool entry with the given identity."""
        for entry in self._pool:
            if entry.id == token_id:
                return self.select_token(entry)
        if not self.can_select:
            return None
        raise ValueError(f"No token with id {token_id} in the pool")

    def undo(self) -> IndexedToken | None:
        """Return the last selected entry to the end of the pool."""
        if not self._selected or self.is_complete:
            return None

        entry = self._selected.pop()
        self._pool.append(entry)
        self._status = SessionStatus.IN_PROGRESS
        self._wrong_index = None
        logger.debug("undo returned %r to the pool", entry.token)
        self._notify(SessionEvent.UNDONE)
        return entry

    def reset(self) -> bool:
        """Put every entry back in the pool and reshuffle.

        Returns False, leaving the session untouched, once it is complete.
        """
        if self.is_complete:
            return False

        entries = self._selected + self._pool
        self._pool = shuffled(entries, self.rng) if self._shuffle_pool else entries
        self._selected = []
        self._status = SessionStatus.IN_PROGRESS
        self._wrong_index = None
        logger.debug("session reset with %d entries", len(self._pool))
        self._notify(SessionEvent.RESET)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, result: PrefixResult) -> None:
        if result.is_correct:
            self._status = SessionStatus.COMPLETE
            self._wrong_index = None
            logger.debug("exercise %s complete", self.exercise.id)
            self._notify(SessionEvent.COMPLETED)
            if self._on_complete is not None:
                self._on_complete()
        elif result.is_wrong:
            self._status = SessionStatus.WRONG
            self._wrong_index = len(self._selected) - 1
            logger.debug("wrong pick at position %d", self._wrong_index)
            self._notify(SessionEvent.WRONG)
        else:
            self._status = SessionStatus.IN_PROGRESS
            self._wrong_index = None
            self._notify(SessionEvent.SELECTED)

    def _notify(self, event: SessionEvent) -> None:
        for listener in self._listeners:
            listener(self, event)
