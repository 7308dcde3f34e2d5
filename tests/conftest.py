"""Shared pytest fixtures for the Listening Tutor test suite."""

import json
import pytest
from datetime import datetime, timedelta, timezone

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exercises import ClozeConfig
from models import Clip, ClipProgress, FSRSState
from storage import SQLiteClipRepository, init_schema, migrate_if_needed


@pytest.fixture
def sample_clip() -> Clip:
    """Create a sample level 1 clip."""
    return Clip(
        id="L1-001",
        audio_id="2412-153954-0019",
        level=1,
        genre="Daily Life",
        transcript="The cat sat on the mat.",
        question="Where did the cat sit?",
        choices=["On the mat", "On the chair", "Under the table", "In the box"],
        answer_index=0,
        explanation="The speaker says the cat sat on the mat.",
    )


@pytest.fixture
def sample_clips(sample_clip) -> list[Clip]:
    """Create a small library spanning levels and genres."""
    return [
        sample_clip,
        Clip(
            id="L1-002",
            level=1,
            genre="Travel",
            transcript="We took the early train to the coast.",
            question="How did they travel?",
            choices=["By bus", "By train", "By car"],
            answer_index=1,
        ),
        Clip(
            id="L2-001",
            level=2,
            genre="Story",
            transcript="The old fisherman pulled his heavy net from the cold grey sea.",
            question="What did the fisherman pull from the sea?",
            choices=["A boat", "A net", "A fish"],
            answer_index=1,
        ),
        Clip(
            id="L3-001",
            level=3,
            genre="Science",
            transcript=(
                "Bright stars burn hydrogen quickly while smaller stars glow "
                "faintly for billions of years before cooling slowly into dim "
                "dwarfs."
            ),
            question="Which stars burn hydrogen quickly?",
            choices=["Bright stars", "Small stars"],
            answer_index=0,
        ),
    ]


@pytest.fixture
def unshuffled_config() -> ClozeConfig:
    """Cloze configuration that keeps the pool in transcript order."""
    return ClozeConfig(shuffle_pool=False)


@pytest.fixture
def reviewed_progress() -> ClipProgress:
    """Progress for a clip answered once, due again tomorrow."""
    return ClipProgress(
        clip_id="L1-001",
        attempts=1,
        corrects=1,
        last_played_at=datetime.now(),
        fsrs_state=FSRSState(
            stability=10.0,
            difficulty=5.0,
            due=datetime.now(timezone.utc) + timedelta(days=1),
            last_review=datetime.now(timezone.utc),
            state=2,  # Review state
            step=None,
        ),
    )


@pytest.fixture
def overdue_progress() -> ClipProgress:
    """Progress for a clip whose review is overdue."""
    return ClipProgress(
        clip_id="L1-002",
        attempts=2,
        corrects=0,
        fsrs_state=FSRSState(
            stability=5.0,
            difficulty=5.0,
            due=datetime.now(timezone.utc) - timedelta(hours=2),
            last_review=datetime.now(timezone.utc) - timedelta(days=1),
            state=2,
            step=None,
        ),
    )


@pytest.fixture
def clips_json_path(tmp_path) -> Path:
    """Write a clips file in the app's camelCase format."""
    path = tmp_path / "clips.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "L1-001",
                    "audioId": "2412-153954-0019",
                    "level": 1,
                    "genre": "Daily Life",
                    "transcript": "The cat sat on the mat.",
                    "question": "Where did the cat sit?",
                    "choices": ["On the mat", "On the chair"],
                    "answerIndex": 0,
                },
                {
                    "id": "L2-001",
                    "level": 2,
                    "genre": "Story",
                    "transcript": "The old fisherman pulled his heavy net.",
                    "question": "What did he pull?",
                    "choices": ["A boat", "A net"],
                    "answer_index": 1,
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary database path for testing."""
    db_path = tmp_path / "test_tutor.db"
    init_schema(db_path)
    return db_path


@pytest.fixture
def populated_test_db(test_db_path, sample_clips) -> Path:
    """Create a test database populated with the sample clips.

    The content version is already current, so opening the library keeps
    any progress a test records.
    """
    migrate_if_needed(test_db_path)
    SQLiteClipRepository(test_db_path).save_all(sample_clips)
    return test_db_path
