"""
Clip library module for browsing and choosing clips to practice.

This module filters clips by level, genre and learner status, discovers
genres from the clips themselves, and combines clips with learner progress
(status, bookmarks, due reviews).
"""

from models import GENRE_ALL, Clip, ClipProgress, ClipStatus, StatusFilter


class ClipLibrary:
    """Filters clips and joins them with learner progress."""

    def __init__(
        self,
        clips: list[Clip],
        progress: dict[str, ClipProgress] | None = None,
    ):
        self.clips = {clip.id: clip for clip in clips}
        self.progress = progress or {}

    def get(self, clip_id: str) -> Clip | None:
        return self.clips.get(clip_id)

    def progress_for(self, clip_id: str) -> ClipProgress:
        """Stored progress, or empty progress for clips never practiced."""
        return self.progress.get(clip_id) or ClipProgress(clip_id=clip_id)

    def filter(
        self,
        level: int | None = None,
        genre: str | None = None,
        status: StatusFilter = StatusFilter.ALL,
    ) -> list[Clip]:
        """Clips matching a level, genre and status.

        None or "All" disables the level and genre filters. REVIEW keeps
        clips attempted but never answered correctly; BOOKMARKED keeps
        bookmarked clips whatever their status.
        """
        filtered = list(self.clips.values())

        if level is not None:
            filtered = [clip for clip in filtered if clip.level == level]

        if genre is not None and genre != GENRE_ALL:
            filtered = [clip for clip in filtered if clip.genre == genre]

        if status == StatusFilter.BOOKMARKED:
            filtered = [
                clip for clip in filtered if self.progress_for(clip.id).is_bookmarked
            ]
        elif status != StatusFilter.ALL:
            wanted = ClipStatus(status.value)
            filtered = [clip for clip in filtered if self.status(clip.id) == wanted]

        return filtered

    def all_genres(self) -> list[str]:
        """Genre choices for a picker: "All" followed by the sorted genres."""
        genres = {clip.genre for clip in self.clips.values()}
        return [GENRE_ALL] + sorted(genres)

    def levels(self) -> list[int]:
        return sorted({clip.level for clip in self.clips.values()})

    def status(self, clip_id: str) -> ClipStatus:
        return self.progress_for(clip_id).status

    def due_clips(
        self,
        level: int | None = None,
        genre: str | None = None,
        status: StatusFilter = StatusFilter.ALL,
    ) -> list[Clip]:
        """Clips never reviewed or whose review is due, in library order."""
        return [
            clip
            for clip in self.filter(level=level, genre=genre, status=status)
            if self.progress_for(clip.id).is_due
        ]

    def get_level_progress(self, level: int) -> float:
        """Fraction of clips at a level answered correctly at least once."""
        clips = self.filter(level=level)
        if not clips:
            return 0.0
        correct = sum(1 for clip in clips if self.progress_for(clip.id).has_correct)
        return correct / len(clips)
