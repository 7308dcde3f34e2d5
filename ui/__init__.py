"""Listening Tutor UI Module - Terminal interface built on rich."""

from ui.app import TutorUI
from ui.components import (
    ClipHeader,
    ClozePanel,
    ExercisePanel,
    FeedbackPanel,
    LibraryTable,
    WelcomeScreen,
    ProgressTracker,
)
from ui.styles import (
    DEFAULT_THEME,
    PRIMARY_BLUE,
    ACCENT_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "TutorUI",
    "ClipHeader",
    "ClozePanel",
    "ExercisePanel",
    "FeedbackPanel",
    "LibraryTable",
    "WelcomeScreen",
    "ProgressTracker",
    "DEFAULT_THEME",
    "PRIMARY_BLUE",
    "ACCENT_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
