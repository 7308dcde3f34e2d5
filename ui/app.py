from rich.console import Console
from rich.text import Text
from rich.panel import Panel
from exercises.generic_handlers import ClozeAction, ClozeHandler, MultipleChoiceHandler
from models import Clip, ClipProgress
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
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)
from typing import Optional, List


class TutorUI:
    """Main UI orchestrator for the listening tutor."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=DEFAULT_THEME)
        self._progress_tracker: Optional[ProgressTracker] = None

    def show_welcome(self, clip_count: int, due_count: int) -> None:
        """Display the welcome screen and wait for user to press Enter."""
        welcome = WelcomeScreen(clip_count=clip_count, due_count=due_count)
        self.console.print(welcome)
        self.console.print()
        self.console.input(Text("Press Enter to start...", style=f"bold {MUTED_GRAY}"))

    def show_session_complete(self, tracker: ProgressTracker) -> None:
        """Display session completion summary."""
        self.console.print(tracker.render_session_summary())

    def show_clip(self, clip: Clip, show_transcript: bool = False) -> None:
        """Display the clip header, optionally with its transcript."""
        self.console.print(ClipHeader(clip, show_transcript=show_transcript))
        self.console.print()

    def ask_show_transcript(self) -> bool:
        """Ask whether to reveal the transcript before the quiz."""
        user_input = self.console.input(
            Text("Show transcript? [y/N] ", style=f"bold {MUTED_GRAY}")
        ).strip()
        return user_input.lower() in ("y", "yes")

    def show_library(self, clips: List[Clip], progress: dict[str, ClipProgress]) -> None:
        """Display the clip library table."""
        self.console.print(LibraryTable(clips, progress))

    def ask_multiple_choice(
        self,
        handler: MultipleChoiceHandler,
        exercise_number: int,
        total_exercises: int,
    ) -> str:
        """Display the comprehension question and get a valid choice.

        Returns:
            "quit" if user quits, otherwise the user's answer.
        """
        progress_percent = (
            (exercise_number / total_exercises * 100) if total_exercises > 0 else 0
        )

        options = handler.get_options()
        panel = ExercisePanel(
            prompt_text=handler.get_prompt_text(),
            options=options,
            exercise_number=exercise_number,
            total_exercises=total_exercises,
            progress_percent=progress_percent,
        )

        self.console.print(panel)
        self.console.print()

        while True:
            user_input = self.console.input(
                Text(handler.get_input_prompt(), style=f"bold {MUTED_GRAY}")
            ).strip()

            if user_input.lower() == "q":
                return "quit"

            should_retry, _, _ = handler.process_user_input_with_input(user_input)
            if not should_retry:
                return user_input

            letters = ", ".join(chr(65 + i) for i in range(len(options)))
            self.console.print(
                Text(f"Please enter {letters} (or 'q' to quit)\n", style=ERROR_RED)
            )

    def run_cloze(self, handler: ClozeHandler) -> bool:
        """Drive a cloze exercise until it is complete or the user quits.

        Returns:
            True if the exercise was completed, False if the user quit.
        """
        session = handler.session
        while not session.is_complete:
            self.console.print(ClozePanel(session, title=handler.get_prompt_text()))
            user_input = self.console.input(
                Text(handler.get_input_prompt(), style=f"bold {MUTED_GRAY}")
            )
            outcome = handler.handle_input(user_input)

            if outcome.action == ClozeAction.QUIT:
                return False

            if outcome.message:
                style = ERROR_RED if not outcome.accepted or outcome.result else INFO_BLUE
                self.console.print(Text(outcome.message, style=style))
            self.console.print()

        self.console.print(ClozePanel(session, title=handler.get_prompt_text()))
        self.show_success("✓ Correct! " + handler.exercise.transcript)
        return True

    def show_feedback(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
        explanation: Optional[str] = None,
    ) -> None:
        """Display feedback for the user's answer."""
        feedback = FeedbackPanel(
            is_correct=is_correct,
            correct_answer=correct_answer,
            user_answer=user_answer,
            explanation=explanation,
        )
        self.console.print(feedback)
        self.console.print()

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style=INFO_BLUE))

    def show_level_progress(self, progress: dict[int, float]) -> None:
        """Show the share of clips answered correctly at each level."""
        if not progress:
            return
        summary = ", ".join(
            f"L{level} {rate * 100:.0f}%" for level, rate in sorted(progress.items())
        )
        self.console.print(Text(f"Level progress: {summary}", style=INFO_BLUE))

    def show_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(Text(message, style=SUCCESS_GREEN))

    def show_quit_message(self) -> None:
        """Display the quit message."""
        self.console.print()
        self.console.print(
            Text("👋 Goodbye! Your progress has been saved.", style=MUTED_GRAY)
        )

    def show_no_clips_due(self) -> None:
        """Display message when no clips are due."""
        self.console.print(
            Panel(
                Text(
                    "🎉 You're all caught up!\n\nNo clips are due for review right now. "
                    "Come back later or pick a clip with --clip.",
                    style=SUCCESS_GREEN,
                ),
                title="All Done",
                border_style=SUCCESS_GREEN,
            )
        )

    def create_progress_tracker(self, total: int) -> ProgressTracker:
        """Create a new progress tracker for a session."""
        self._progress_tracker = ProgressTracker(total)
        return self._progress_tracker

    def update_progress(self, is_correct: bool) -> None:
        """Update the progress tracker with a new result."""
        if self._progress_tracker:
            self._progress_tracker.update(is_correct)

    def record_cloze_completed(self) -> None:
        if self._progress_tracker:
            self._progress_tracker.record_cloze_completed()

    def get_progress_tracker(self) -> Optional[ProgressTracker]:
        """Get the current progress tracker."""
        return self._progress_tracker

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def wait_for_continue(self) -> None:
        """Wait for user to press Enter to continue."""
        self.console.input(
            Text("Press Enter to continue...", style=f"bold {MUTED_GRAY}")
        )
