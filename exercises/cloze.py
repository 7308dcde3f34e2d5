"""Tokenization and blank selection for transcript cloze exercises.

A transcript is split into word tokens, then a level-dependent number of
token positions is chosen as blanks. Blanks favor content words and are
spread evenly across the transcript.
"""

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from exercises.config import ClozeConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_CONFIG = ClozeConfig()


def tokenize(transcript: str) -> list[str]:
    """Split a transcript into word tokens.

    Punctuation stays attached to its word ("him." stays "him."). Runs of
    spaces do not produce empty tokens.
    """
    return [token for token in transcript.split(" ") if token]


def blank_count(level: int, config: ClozeConfig | None = None) -> int:
    """Return how many blanks an exercise at this level should have."""
    return (config or _DEFAULT_CONFIG).blank_count(level)


def bare_word(token: str) -> str:
    """Strip every non-letter character from a token and lowercase it."""
    return "".join(ch for ch in token if ch.isalpha()).lower()


def is_content_word(token: str, stop_words: frozenset[str]) -> bool:
    """A token is a content word unless it is empty or a stop word once bare."""
    bare = bare_word(token)
    return bool(bare) and bare not in stop_words


def select_blank_indices(
    tokens: Sequence[str],
    level: int,
    config: ClozeConfig | None = None,
) -> set[int]:
    """Choose which token positions become blanks.

    Args:
        tokens: Tokens in transcript order.
        level: Difficulty level; drives the number of blanks.
        config: Optional cloze configuration (blank counts, stop words).

    Returns:
        Set of token indices to blank out. Never larger than the blank count
        for the level, and never larger than the number of tokens.
    """
    config = config or _DEFAULT_CONFIG
    count = config.blank_count(level)

    if len(tokens) <= count:
        return set(range(len(tokens)))

    content_indices: list[int] = []
    other_indices: list[int] = []
    for i, token in enumerate(tokens):
        if is_content_word(token, config.stop_words):
            content_indices.append(i)
        else:
            other_indices.append(i)

    candidates = content_indices
    if len(candidates) < count:
        candidates = candidates + other_indices
    candidates.sort()

    if len(candidates) <= count:
        return set(candidates)

    # Spread the picks evenly over the candidate list
    selected: set[int] = set()
    step = len(candidates) / count
    for i in range(count):
        position = min(int(i * step + step / 2), len(candidates) - 1)
        selected.add(candidates[position])

    # Collisions from clamping: top up in candidate order
    for candidate in candidates:
        if len(selected) >= count:
            break
        selected.add(candidate)

    logger.debug(
        "selected %d blanks from %d candidates (level=%d, tokens=%d)",
        len(selected),
        len(candidates),
        level,
        len(tokens),
    )
    return selected


def shuffled(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of items. The input is left untouched."""
    result = list(items)
    (rng or random.Random()).shuffle(result)
    return result
