"""Exercise generators that turn clips into exercises.

These generators contain the procedural logic for building exercises
from a clip's transcript and question. They only need the clip data and
a configuration; presentation and answer checking live in the handlers.
"""

import random
import uuid
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from models import Clip

from exercises.cloze import select_blank_indices, tokenize
from exercises.config import ClozeConfig, MultipleChoiceConfig
from exercises.generic_models import (
    ClozeExercise,
    ClozeToken,
    GenericExercise,
    MultipleChoiceExercise,
)

C = TypeVar("C")  # Config type
E = TypeVar("E", bound=GenericExercise)  # Exercise type


class ExerciseGenerator(ABC, Generic[C, E]):
    """Abstract base class for exercise generators."""

    def __init__(self, config: C):
        self.config = config

    @abstractmethod
    def from_clip(self, clip: Clip) -> E | None:
        """Generate an exercise for a clip.

        Args:
            clip: The clip to build the exercise from.

        Returns:
            An exercise, or None if generation is not possible.
        """
        pass


class ClozeGenerator(ExerciseGenerator[ClozeConfig, ClozeExercise]):
    """Generates cloze / word-order exercises from transcripts."""

    def __init__(self, config: ClozeConfig | None = None):
        super().__init__(config or ClozeConfig())

    def generate(
        self,
        transcript: str,
        level: int,
        *,
        full_reorder: bool = False,
        source_id: str | None = None,
    ) -> ClozeExercise:
        tokens = tokenize(transcript)
        if full_reorder:
            blank_indices = set(range(len(tokens)))
        else:
            blank_indices = select_blank_indices(tokens, level, self.config)

        cloze_tokens: list[ClozeToken] = []
        blank_order = 0
        for i, word in enumerate(tokens):
            is_blank = i in blank_indices
            cloze_tokens.append(
                ClozeToken(
                    index=i,
                    word=word,
                    is_blank=is_blank,
                    blank_order=blank_order if is_blank else -1,
                )
            )
            if is_blank:
                blank_order += 1

        return ClozeExercise(
            id=str(uuid.uuid4()),
            source_ids=[source_id] if source_id else [],
            difficulty=min(level / 3, 1.0) if level > 0 else 0.0,
            transcript=transcript,
            level=level,
            tokens=cloze_tokens,
            full_reorder=full_reorder,
            metadata={"blank_count": blank_order},
        )

    def from_clip(self, clip: Clip, full_reorder: bool = False) -> ClozeExercise:
        return self.generate(
            clip.transcript,
            clip.level,
            full_reorder=full_reorder,
            source_id=clip.id,
        )


class MultipleChoiceGenerator(
    ExerciseGenerator[MultipleChoiceConfig, MultipleChoiceExercise]
):
    """Generates the comprehension question exercise for a clip."""

    def __init__(
        self,
        config: MultipleChoiceConfig | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(config or MultipleChoiceConfig())
        self.rng = rng or random.Random()

    def from_clip(self, clip: Clip) -> MultipleChoiceExercise | None:
        if len(clip.choices) < 2:
            return None

        options = list(clip.choices)
        correct_answer = clip.correct_choice
        if self.config.shuffle_options:
            self.rng.shuffle(options)

        return MultipleChoiceExercise(
            id=str(uuid.uuid4()),
            source_ids=[clip.id],
            difficulty=clip.difficulty,
            prompt=clip.question,
            options=options,
            correct_index=options.index(correct_answer),
            explanation=clip.explanation,
            metadata={"genre": clip.genre, "level": clip.level},
        )
