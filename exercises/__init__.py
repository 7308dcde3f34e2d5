"""Exercises for the listening tutor.

This package turns clips into exercises and validates the learner's answers.

Architecture:
- Cloze helpers tokenize transcripts and choose blanks (pure functions)
- Generators consume clips to produce exercises (procedural)
- The exercise session drives a cloze exercise pick by pick
- Handlers translate typed input into answers and session operations

Generic exercise models:
- MultipleChoiceExercise: Pick one option from a list
- ClozeExercise: Rebuild the blanked words of a transcript in order

Handlers:
- MultipleChoiceHandler: Handles the comprehension question
- ClozeHandler: Handles cloze / word-order input

Configuration:
- ExerciseGeneratorConfig: Configure exercise generation behavior
"""

from exercises.base import parse_letter_input, parse_number_input
from exercises.cloze import (
    bare_word,
    blank_count,
    is_content_word,
    select_blank_indices,
    shuffled,
    tokenize,
)
from exercises.config import (
    DEFAULT_STOP_WORDS,
    ClozeConfig,
    ExerciseGeneratorConfig,
    MultipleChoiceConfig,
    load_config,
)
from exercises.generators import (
    ClozeGenerator,
    ExerciseGenerator,
    MultipleChoiceGenerator,
)
from exercises.generic_handlers import (
    ClozeAction,
    ClozeCommandResult,
    ClozeHandler,
    GenericExerciseHandler,
    MultipleChoiceHandler,
)
from exercises.generic_models import (
    ClozeExercise,
    ClozeToken,
    GenericExercise,
    IndexedToken,
    MultipleChoiceExercise,
)
from exercises.session import ExerciseSession, SessionEvent, SessionStatus
from exercises.validation import PrefixResult, PrefixStatus, check_prefix

__all__ = [
    # Utilities
    "parse_letter_input",
    "parse_number_input",
    # Tokenizer and blank selector
    "tokenize",
    "blank_count",
    "bare_word",
    "is_content_word",
    "select_blank_indices",
    "shuffled",
    # Prefix validation
    "check_prefix",
    "PrefixResult",
    "PrefixStatus",
    # Generic models
    "GenericExercise",
    "MultipleChoiceExercise",
    "ClozeExercise",
    "ClozeToken",
    "IndexedToken",
    # Session
    "ExerciseSession",
    "SessionEvent",
    "SessionStatus",
    # Handlers
    "GenericExerciseHandler",
    "MultipleChoiceHandler",
    "ClozeHandler",
    "ClozeAction",
    "ClozeCommandResult",
    # Configuration
    "DEFAULT_STOP_WORDS",
    "ExerciseGeneratorConfig",
    "ClozeConfig",
    "MultipleChoiceConfig",
    "load_config",
    # Generators
    "ExerciseGenerator",
    "ClozeGenerator",
    "MultipleChoiceGenerator",
]
