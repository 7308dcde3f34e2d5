"""
FSRS integration module for clip review scheduling.

This module provides functions to:
1. Convert between our FSRSState model and py-fsrs Card objects
2. Process reviews and update a clip's FSRS state
3. Calculate due dates and retrievability
"""

import logging
from datetime import datetime, timezone

from fsrs import Card, Scheduler, State

from models import ClipProgress, FSRSState, rating_for

logger = logging.getLogger(__name__)

# Global FSRS scheduler with default parameters
# desired_retention=0.9 means we aim for 90% recall probability
_scheduler = Scheduler()


def get_scheduler() -> Scheduler:
    """Get the global FSRS scheduler instance."""
    return _scheduler


def fsrs_state_to_card(fsrs_state: FSRSState) -> Card:
    """Convert our FSRSState model to a py-fsrs Card object."""
    card = Card()
    card.stability = fsrs_state.stability
    card.difficulty = fsrs_state.difficulty
    if fsrs_state.due:
        card.due = fsrs_state.due.replace(tzinfo=timezone.utc)
    if fsrs_state.last_review:
        card.last_review = fsrs_state.last_review.replace(tzinfo=timezone.utc)
    card.state = State(fsrs_state.state)
    card.step = fsrs_state.step
    return card


def card_to_fsrs_state(card: Card) -> FSRSState:
    """Convert a py-fsrs Card object to our FSRSState model."""
    return FSRSState(
        stability=card.stability,
        difficulty=card.difficulty,
        due=card.due.replace(tzinfo=None) if card.due else None,
        last_review=card.last_review.replace(tzinfo=None) if card.last_review else None,
        state=card.state.value,
        step=card.step,
    )


def process_clip_review(progress: ClipProgress, is_correct: bool) -> None:
    """
    Process a review of a clip.

    Clips without FSRS state start from a fresh card. Maps the binary
    correct/incorrect to FSRS ratings:
    - Correct: Rating.Good (remembered)
    - Incorrect: Rating.Again (forgot)
    """
    if progress.fsrs_state is None:
        card = Card()
    else:
        card = fsrs_state_to_card(progress.fsrs_state)

    scheduler = get_scheduler()
    card, _ = scheduler.review_card(card, rating_for(is_correct))

    progress.fsrs_state = card_to_fsrs_state(card)
    logger.debug(
        "clip %s reviewed (correct=%s), next due %s",
        progress.clip_id,
        is_correct,
        progress.fsrs_state.due,
    )


def get_retrievability(progress: ClipProgress) -> float | None:
    """
    Get current retrievability (probability of recall) for a clip.
    Returns None if the clip has never been reviewed.
    """
    if progress.fsrs_state is None:
        return None

    card = fsrs_state_to_card(progress.fsrs_state)
    return get_scheduler().get_card_retrievability(card, datetime.now(timezone.utc))
