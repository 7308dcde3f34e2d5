"""Generic, domain-agnostic exercise handlers.

These handlers only handle presentation text, input processing, and answer
checking. They do NOT know how to generate exercises - that's done by the
generators.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from exercises.base import parse_letter_input, parse_number_input
from exercises.generic_models import GenericExercise, MultipleChoiceExercise
from exercises.session import ExerciseSession, SessionStatus
from exercises.validation import PrefixResult

E = TypeVar("E", bound=GenericExercise)


class GenericExerciseHandler(ABC, Generic[E]):
    """Abstract base class for generic exercise handlers."""

    def __init__(self, exercise: E):
        self.exercise = exercise

    @abstractmethod
    def get_prompt_text(self) -> str:
        """Return the main prompt text."""
        ...

    @abstractmethod
    def get_options(self) -> list[str]:
        """Return options for display."""
        ...

    @abstractmethod
    def check_answer(self, user_input: str, context: Any = None) -> tuple[bool, str]:
        """Check answer. Returns (is_correct, correct_answer_display)."""
        ...

    @abstractmethod
    def get_input_prompt(self) -> str:
        """Return input prompt string."""
        ...

    def process_user_input_with_input(
        self, user_input: str
    ) -> tuple[bool, bool | None, str]:
        """Process user input for this exercise with pre-collected input.

        Args:
            user_input: Raw user input string.

        Returns:
            Tuple of (should_retry, is_correct_or_None, correct_answer_display).
            - should_retry: True if invalid input, user should retry.
            - is_correct_or_None: True/False for correct/incorrect, None if quit.
            - correct_answer_display: String showing the correct answer.
        """
        if user_input.lower() == "q":
            return False, None, ""

        is_correct, correct_answer = self.check_answer(user_input)
        return False, is_correct, correct_answer


class MultipleChoiceHandler(GenericExerciseHandler[MultipleChoiceExercise]):
    """Handler for the comprehension question."""

    def get_prompt_text(self) -> str:
        return self.exercise.prompt

    def get_options(self) -> list[str]:
        return self.exercise.options

    def check_answer(self, user_input: str, context: Any = None) -> tuple[bool, str]:
        correct_answer = self.exercise.options[self.exercise.correct_index]
        user_index = parse_letter_input(user_input, len(self.exercise.options))
        if user_index is None:
            return False, correct_answer
        return user_index == self.exercise.correct_index, correct_answer

    def get_input_prompt(self) -> str:
        letters = "/".join(chr(65 + i) for i in range(len(self.exercise.options)))
        return f"Your answer ({letters}, or 'q' to quit): "

    def process_user_input_with_input(
        self, user_input: str
    ) -> tuple[bool, bool | None, str]:
        """Invalid letters ask for a retry instead of counting as wrong."""
        if user_input.lower() != "q" and (
            parse_letter_input(user_input, len(self.exercise.options)) is None
        ):
            return True, False, ""

        return super().process_user_input_with_input(user_input)


class ClozeAction(str, Enum):
    SELECT = "select"
    UNDO = "undo"
    RESET = "reset"
    QUIT = "quit"
    INVALID = "invalid"


class ClozeCommandResult(BaseModel):
    """What a single line of cloze input did to the session."""

    action: ClozeAction
    accepted: bool = True
    result: PrefixResult | None = None
    message: str = ""


class ClozeHandler:
    """Translates typed commands into exercise session operations.

    Commands:
    - a pool number (1-based) picks that token
    - "u" undoes the last pick
    - "r" resets all picks and reshuffles
    - "q" quits the exercise
    """

    def __init__(self, session: ExerciseSession):
        self.session = session

    @property
    def exercise(self):
        return self.session.exercise

    def get_prompt_text(self) -> str:
        if self.exercise.full_reorder:
            return "Put the words in order"
        return "Fill in the blanks"

    def get_options(self) -> list[str]:
        return [entry.token for entry in self.session.pool]

    def get_input_prompt(self) -> str:
        return "Pick a number, 'u' to undo, 'r' to reset, 'q' to quit: "

    def handle_input(self, user_input: str) -> ClozeCommandResult:
        command = user_input.strip().lower()

        if command == "q":
            return ClozeCommandResult(action=ClozeAction.QUIT)

        if command == "u":
            if not self.session.can_undo:
                return ClozeCommandResult(
                    action=ClozeAction.UNDO,
                    accepted=False,
                    message="Nothing to undo.",
                )
            entry = self.session.undo()
            return ClozeCommandResult(
                action=ClozeAction.UNDO, message=f"Returned '{entry.token}'."
            )

        if command == "r":
            if not self.session.can_reset:
                return ClozeCommandResult(
                    action=ClozeAction.RESET,
                    accepted=False,
                    message="Nothing to reset.",
                )
            self.session.reset()
            return ClozeCommandResult(action=ClozeAction.RESET, message="Reshuffled.")

        if self.session.status == SessionStatus.WRONG:
            return ClozeCommandResult(
                action=ClozeAction.SELECT,
                accepted=False,
                message="That word doesn't fit. Undo ('u') or reset ('r') first.",
            )

        pool = self.session.pool
        index = parse_number_input(command, len(pool))
        if index is None:
            return ClozeCommandResult(
                action=ClozeAction.INVALID,
                accepted=False,
                message=f"Enter a number 1-{len(pool)}, 'u', 'r' or 'q'.",
            )

        result = self.session.select_by_id(pool[index].id)
        if result is None:
            return ClozeCommandResult(action=ClozeAction.SELECT, accepted=False)
        if result.is_wrong:
            return ClozeCommandResult(
                action=ClozeAction.SELECT,
                result=result,
                message=f"'{pool[index].token}' doesn't go there.",
            )
        return ClozeCommandResult(action=ClozeAction.SELECT, result=result)
