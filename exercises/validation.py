"""Prefix validation of a learner's token selection against the answer."""

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict


class PrefixStatus(str, Enum):
    CORRECT = "correct"
    VALID_PREFIX = "valid_prefix"
    WRONG = "wrong"


class PrefixResult(BaseModel):
    """Outcome of comparing a selection with the answer.

    ``index`` is set only for WRONG results: the first mismatching or
    out-of-range position.
    """

    model_config = ConfigDict(frozen=True)

    status: PrefixStatus
    index: int | None = None

    @classmethod
    def correct(cls) -> "PrefixResult":
        return cls(status=PrefixStatus.CORRECT)

    @classmethod
    def valid_prefix(cls) -> "PrefixResult":
        return cls(status=PrefixStatus.VALID_PREFIX)

    @classmethod
    def wrong(cls, index: int) -> "PrefixResult":
        return cls(status=PrefixStatus.WRONG, index=index)

    @property
    def is_correct(self) -> bool:
        return self.status == PrefixStatus.CORRECT

    @property
    def is_wrong(self) -> bool:
        return self.status == PrefixStatus.WRONG


def check_prefix(selected: Sequence[str], answer: Sequence[str]) -> PrefixResult:
    """Check whether ``selected`` is the answer, a prefix of it, or neither.

    Args:
        selected: Tokens chosen so far, in choice order.
        answer: The target token sequence.

    Returns:
        CORRECT for an exact match, VALID_PREFIX when every chosen token
        matches but some remain, otherwise WRONG at the first bad position.
    """
    for i, token in enumerate(selected):
        if i >= len(answer) or token != answer[i]:
            return PrefixResult.wrong(i)
    if len(selected) == len(answer):
        return PrefixResult.correct()
    return PrefixResult.valid_prefix()
