"""Abstract repository interfaces for the storage layer."""

from abc import ABC, abstractmethod

from models import Clip, ClipProgress


class ClipNotFoundError(ValueError):
    """Raised when an operation refers to a clip that does not exist."""


class ClipRepository(ABC):
    """Abstract interface for clip storage."""

    @abstractmethod
    def get_all(self) -> list[Clip]:
        """Load all clips.

        Returns:
            List of all clips, ordered by level then id.
        """
        pass

    @abstractmethod
    def get_by_id(self, clip_id: str) -> Clip | None:
        """Load a single clip by ID.

        Args:
            clip_id: The clip ID.

        Returns:
            The clip, or None if not found.
        """
        pass

    @abstractmethod
    def save_all(self, clips: list[Clip]) -> int:
        """Insert or replace clips.

        Args:
            clips: Clips to store.

        Returns:
            Number of clips written.
        """
        pass


class ProgressRepository(ABC):
    """Abstract interface for clip progress storage."""

    @abstractmethod
    def get(self, clip_id: str) -> ClipProgress:
        """Get progress for a clip, or empty progress if none is stored."""
        pass

    @abstractmethod
    def get_all(self) -> dict[str, ClipProgress]:
        """Get all stored progress keyed by clip ID."""
        pass

    @abstractmethod
    def save(self, progress: ClipProgress) -> None:
        """Save/update progress for a single clip."""
        pass

    @abstractmethod
    def record_answer(self, clip_id: str, is_correct: bool) -> ClipProgress:
        """Count an answer and schedule the clip's next review.

        Args:
            clip_id: The clip answered.
            is_correct: Whether the answer was correct.

        Returns:
            The updated progress.
        """
        pass

    @abstractmethod
    def record_play(self, clip_id: str) -> ClipProgress:
        """Stamp the clip as played now."""
        pass

    @abstractmethod
    def toggle_bookmark(self, clip_id: str) -> bool:
        """Flip the clip's bookmark.

        Returns:
            The new bookmark state.
        """
        pass
