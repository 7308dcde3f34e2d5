"""Configuration for exercise generation.

These configuration models allow users to tune exercise generation behavior,
such as how many blanks each level gets, which words count as stop words,
and whether to shuffle options.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Articles, pronouns, forms of "be", common prepositions, conjunctions
# and auxiliaries. Never chosen as blanks while content words remain.
DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "is", "am", "are", "was", "were", "be", "been", "being",
        "i", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
        "my", "his", "its", "our", "your", "their",
        "in", "on", "at", "to", "for", "of", "with", "by", "from", "as",
        "and", "but", "or", "not", "no", "so", "if", "do", "did", "does",
        "had", "has", "have", "that", "this", "will", "would", "could", "should",
    }
)  # fmt: skip


class ClozeConfig(BaseModel):
    """Configuration for cloze / word-order generation."""

    level_blank_counts: dict[int, int] = Field(default_factory=lambda: {1: 5, 2: 7})
    default_blank_count: int = Field(default=10, ge=1)
    stop_words: frozenset[str] = DEFAULT_STOP_WORDS
    shuffle_pool: bool = True

    def blank_count(self, level: int) -> int:
        """Number of blanks for a level; unknown levels get the default."""
        return self.level_blank_counts.get(level, self.default_blank_count)


class MultipleChoiceConfig(BaseModel):
    """Configuration for multiple choice generation."""

    shuffle_options: bool = False


class ExerciseGeneratorConfig(BaseModel):
    """Master configuration for all exercise types."""

    cloze: ClozeConfig = Field(default_factory=ClozeConfig)
    multiple_choice: MultipleChoiceConfig = Field(default_factory=MultipleChoiceConfig)


def load_config(path: Path | None) -> ExerciseGeneratorConfig:
    """Load generator configuration from a JSON file.

    Missing files fall back to the defaults. Malformed files raise
    pydantic's ValidationError.
    """
    if path is None or not path.exists():
        if path is not None:
            logger.warning("config file %s not found, using defaults", path)
        return ExerciseGeneratorConfig()

    config = ExerciseGeneratorConfig.model_validate_json(
        path.read_text(encoding="utf-8")
    )
    logger.debug("loaded exercise config from %s", path)
    return config
