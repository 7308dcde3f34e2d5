"""Unit tests for FSRS scheduler integration."""

import pytest
from datetime import datetime, timedelta, timezone

import fsrs

from fsrs_scheduler import (
    card_to_fsrs_state,
    fsrs_state_to_card,
    get_retrievability,
    process_clip_review,
)
from models import ClipProgress, ClipStatus, FSRSState, rating_for


class TestFSRSStateConversion:
    """Tests for FSRS state conversion functions."""

    def test_roundtrip_conversion(self):
        """Converting state to card and back should preserve key data."""
        original = FSRSState(
            stability=10.0,
            difficulty=5.0,
            due=datetime.now(),
            last_review=datetime.now() - timedelta(days=1),
            state=2,
            step=None,
        )

        card = fsrs_state_to_card(original)
        result = card_to_fsrs_state(card)

        assert abs(result.stability - original.stability) < 0.01
        assert abs(result.difficulty - original.difficulty) < 0.01
        assert result.state == original.state
        assert result.due == original.due

    def test_convert_learning_state(self):
        """Should handle learning card state conversion."""
        original = FSRSState(
            stability=None,
            difficulty=None,
            due=datetime.now(),
            last_review=None,
            state=1,  # Learning
            step=0,
        )

        card = fsrs_state_to_card(original)
        result = card_to_fsrs_state(card)

        assert result.state == original.state
        assert result.step == 0


class TestRating:
    """Tests for mapping answers to FSRS ratings."""

    def test_correct_is_good(self):
        assert rating_for(True) == fsrs.Rating.Good

    def test_wrong_is_again(self):
        assert rating_for(False) == fsrs.Rating.Again


class TestProcessClipReview:
    """Tests for FSRS review processing."""

    def test_first_review_creates_state(self):
        """A clip with no FSRS state starts from a fresh card."""
        progress = ClipProgress(clip_id="L1-001")

        process_clip_review(progress, is_correct=True)

        assert progress.fsrs_state is not None
        assert progress.fsrs_state.due is not None
        assert progress.fsrs_state.last_review is not None

    def test_correct_review_updates_state(self, reviewed_progress):
        """Correct review should update FSRS state."""
        initial_due = reviewed_progress.fsrs_state.due

        process_clip_review(reviewed_progress, is_correct=True)

        assert reviewed_progress.fsrs_state.due != initial_due

    def test_correct_increases_stability(self, reviewed_progress):
        """Correct review should generally increase stability."""
        initial_stability = reviewed_progress.fsrs_state.stability

        process_clip_review(reviewed_progress, is_correct=True)

        assert reviewed_progress.fsrs_state.stability >= initial_stability * 0.9

    def test_wrong_review_comes_due_sooner(self):
        """Forgetting schedules the clip sooner than remembering."""
        remembered = ClipProgress(clip_id="a")
        forgotten = ClipProgress(clip_id="b")

        process_clip_review(remembered, is_correct=True)
        process_clip_review(forgotten, is_correct=False)

        assert forgotten.fsrs_state.due <= remembered.fsrs_state.due

    def test_does_not_touch_counts(self):
        progress = ClipProgress(clip_id="L1-001")
        process_clip_review(progress, is_correct=True)
        assert progress.attempts == 0
        assert progress.status == ClipStatus.NEW


class TestDueDate:
    """Tests for due date properties on clip progress."""

    def test_never_reviewed_is_due(self):
        progress = ClipProgress(clip_id="L1-001")
        assert progress.due_date is None
        assert progress.is_due

    def test_past_due(self, reviewed_progress):
        reviewed_progress.fsrs_state.due = datetime.now(timezone.utc) - timedelta(hours=1)
        assert reviewed_progress.is_due

    def test_future_due(self, reviewed_progress):
        reviewed_progress.fsrs_state.due = datetime.now(timezone.utc) + timedelta(days=7)
        assert not reviewed_progress.is_due


class TestRetrievability:
    """Tests for FSRS retrievability calculation."""

    def test_retrievability_range(self, reviewed_progress):
        """Retrievability should be between 0 and 1."""
        result = get_retrievability(reviewed_progress)

        assert result is not None
        assert 0.0 <= result <= 1.0

    def test_none_without_fsrs_state(self):
        """Should return None if the clip was never reviewed."""
        assert get_retrievability(ClipProgress(clip_id="L1-001")) is None


@pytest.mark.parametrize("is_correct", [True, False])
def test_review_state_is_valid_fsrs_state(is_correct):
    progress = ClipProgress(clip_id="L1-001")
    process_clip_review(progress, is_correct)
    assert progress.fsrs_state.state in {s.value for s in fsrs.State}
