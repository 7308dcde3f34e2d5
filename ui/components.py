from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich.align import Align
from rich.columns import Columns
from rich import box
from typing import Optional, List

from exercises.session import ExerciseSession, SessionStatus
from fsrs_scheduler import get_retrievability
from models import Clip, ClipProgress, ClipStatus
from ui.styles import (
    PRIMARY_BLUE,
    ACCENT_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    MUTED_GRAY,
    TEXT_WHITE,
    create_error_header,
    create_success_header,
    get_correct_rate_style,
    get_level_style,
)


class ClipHeader:
    """Level badge, genre and optional transcript for the current clip."""

    def __init__(self, clip: Clip, show_transcript: bool = False):
        self.clip = clip
        self.show_transcript = show_transcript

    def render(self) -> Panel:
        content = Text()
        content.append(f" Level {self.clip.level} ", get_level_style(self.clip.level))
        content.append("  ")
        content.append(self.clip.genre, Style(color=MUTED_GRAY))

        if self.clip.audio_id:
            content.append(f"\nAudio: {self.clip.audio_id}", Style(color=MUTED_GRAY))

        if self.show_transcript:
            content.append("\n\n")
            content.append(self.clip.transcript, Style(color=TEXT_WHITE))

        return Panel(
            Align.left(content),
            title=self.clip.id,
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ExercisePanel:
    """A styled panel for displaying a multiple choice question."""

    def __init__(
        self,
        prompt_text: str,
        options: List[str],
        exercise_number: int = 0,
        total_exercises: int = 0,
        progress_percent: float = 0.0,
    ):
        self.prompt_text = prompt_text
        self.options = options
        self.exercise_number = exercise_number
        self.total_exercises = total_exercises
        self.progress_percent = progress_percent

    def render(self) -> Panel:
        content = Text()

        if self.total_exercises > 0:
            progress_bar = self._create_progress_bar()
            content.append(progress_bar, Style(color=MUTED_GRAY))
            content.append("\n")
            content.append(
                f"Clip {self.exercise_number}/{self.total_exercises}\n",
                Style(color=MUTED_GRAY),
            )

        content.append(self.prompt_text, Style(color=PRIMARY_BLUE, bold=True))
        content.append("\n\n")

        for i, option in enumerate(self.options):
            content.append(f"{chr(65 + i)}. ", Style(color=ACCENT_GOLD, bold=True))
            content.append(option, Style(color=TEXT_WHITE))
            content.append("\n")

        letters = ", ".join(chr(65 + i) for i in range(len(self.options)))
        return Panel(
            Align.left(content),
            title="Listening Quiz",
            subtitle=f"Type {letters} (or 'q' to quit)",
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _create_progress_bar(self) -> str:
        """Create a text-based progress bar."""
        width = 30
        filled = int(width * self.progress_percent / 100)
        remaining = width - filled
        bar = "█" * filled + "░" * remaining
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render()


class ClozePanel:
    """The transcript with blanks, plus the numbered pool of remaining words."""

    def __init__(self, session: ExerciseSession, title: str = "Fill in the blanks"):
        self.session = session
        self.title = title

    def render(self) -> Panel:
        selected = self.session.selected
        wrong_index = self.session.wrong_index

        sentence = Text()
        for i, token in enumerate(self.session.tokens):
            if i > 0:
                sentence.append(" ")
            if not token.is_blank:
                sentence.append(token.word, Style(color=MUTED_GRAY))
            elif token.blank_order < len(selected):
                color = ERROR_RED if token.blank_order == wrong_index else PRIMARY_BLUE
                sentence.append(
                    selected[token.blank_order].token, Style(color=color, bold=True)
                )
            elif token.blank_order == len(selected):
                # Next blank to fill
                sentence.append(
                    "___", Style(color=PRIMARY_BLUE, bold=True, underline=True)
                )
            else:
                sentence.append("___", Style(color=MUTED_GRAY))

        pool = Text()
        for i, entry in enumerate(self.session.pool):
            pool.append(f"{i + 1}. ", Style(color=ACCENT_GOLD, bold=True))
            pool.append(entry.token, Style(color=TEXT_WHITE))
            pool.append("   ")

        content = Text()
        content.append(sentence)
        content.append("\n\n")
        content.append(pool)

        if self.session.status == SessionStatus.WRONG:
            border = ERROR_RED
            subtitle = "'u' undo, 'r' reset, 'q' quit"
        elif self.session.is_complete:
            border = SUCCESS_GREEN
            subtitle = "Complete"
        else:
            border = PRIMARY_BLUE
            subtitle = "Pick a number, 'u' undo, 'r' reset, 'q' quit"

        return Panel(
            Align.left(content),
            title=self.title,
            subtitle=subtitle,
            border_style=border,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for displaying exercise feedback."""

    def __init__(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
        explanation: Optional[str] = None,
    ):
        self.is_correct = is_correct
        self.correct_answer = correct_answer
        self.user_answer = user_answer
        self.explanation = explanation

    def render(self) -> Panel:
        content = Text()

        if self.is_correct:
            content.append(create_success_header())
            content.append("\n")
        else:
            content.append(create_error_header())
            content.append("\n")
            if self.user_answer:
                content.append(
                    f"You answered: {self.user_answer}\n", Style(color=MUTED_GRAY)
                )

        content.append("\n")
        content.append("Correct answer: ", Style(color=MUTED_GRAY))
        content.append(self.correct_answer, Style(color=SUCCESS_GREEN, bold=True))

        if self.explanation:
            content.append("\n\n")
            content.append("Explanation:\n", Style(color=ACCENT_GOLD, bold=True))
            content.append(self.explanation, Style(color=TEXT_WHITE))

        return Panel(
            Align.left(content),
            title="Result",
            border_style=SUCCESS_GREEN if self.is_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class LibraryTable:
    """A styled table of clips with level, genre and progress."""

    STATUS_LABELS = {
        ClipStatus.NEW: ("new", MUTED_GRAY),
        ClipStatus.REVIEW: ("review", ACCENT_GOLD),
        ClipStatus.CORRECT: ("✓", SUCCESS_GREEN),
    }

    def __init__(self, clips: List[Clip], progress: dict[str, ClipProgress]):
        self.clips = clips
        self.progress = progress

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=PRIMARY_BLUE, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )

        table.add_column("ID", style=Style(color=TEXT_WHITE))
        table.add_column("Level", justify="center")
        table.add_column("Genre", style=Style(color=MUTED_GRAY))
        table.add_column("Status", justify="center")
        table.add_column("Correct", justify="right")
        table.add_column("Recall", justify="right")
        table.add_column("★", justify="center")

        for clip in self.clips:
            progress = self.progress.get(clip.id) or ClipProgress(clip_id=clip.id)
            label, color = self.STATUS_LABELS[progress.status]
            rate = (
                Text(
                    f"{progress.correct_rate * 100:.0f}%",
                    style=get_correct_rate_style(progress.correct_rate),
                )
                if progress.has_progress
                else Text("-", style=Style(color=MUTED_GRAY))
            )
            recall = get_retrievability(progress)
            recall_text = (
                Text(f"{recall * 100:.0f}%", style=get_correct_rate_style(recall))
                if recall is not None
                else Text("-", style=Style(color=MUTED_GRAY))
            )
            table.add_row(
                clip.id,
                Text(f" {clip.level} ", style=get_level_style(clip.level)),
                clip.genre,
                Text(label, style=Style(color=color)),
                rate,
                recall_text,
                Text("★" if progress.is_bookmarked else "", style=ACCENT_GOLD),
            )

        return Panel(
            Align.center(table),
            title="Clip Library",
            border_style=ACCENT_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WelcomeScreen:
    """Welcome screen with banner and session info."""

    def __init__(self, clip_count: int, due_count: int):
        self.clip_count = clip_count
        self.due_count = due_count

    def render(self) -> Panel:
        banner = Text()
        banner.append(
            "╔═══════════════════════════════════════════╗\n", Style(color=PRIMARY_BLUE)
        )
        banner.append(
            "║             Listening Tutor               ║\n",
            Style(color=ACCENT_GOLD, bold=True),
        )
        banner.append(
            "╚═══════════════════════════════════════════╝\n", Style(color=PRIMARY_BLUE)
        )
        banner.append("\n")
        banner.append(
            "Listen, answer, then rebuild the transcript.\n\n",
            Style(color=TEXT_WHITE),
        )
        banner.append(
            "Type 'q' at any time to save and quit.\n", Style(color=MUTED_GRAY)
        )

        stats = Table(
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.ROUNDED,
        )
        stats.add_column("Label", justify="center")
        stats.add_column("Value", justify="center")

        stats.add_row(
            Text("Total Clips", style=Style(color=MUTED_GRAY)),
            Text(str(self.clip_count), style=Style(color=ACCENT_GOLD, bold=True)),
        )
        stats.add_row(
            Text("Due Today", style=Style(color=MUTED_GRAY)),
            Text(str(self.due_count), style=Style(color=ACCENT_GOLD, bold=True)),
        )

        return Panel(
            Columns(
                [Align.center(banner), Align.center(stats)],
                align="center",
                padding=(3, 3),
            ),
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ProgressTracker:
    """Track and display session progress."""

    def __init__(self, total: int):
        self.total = total
        self.current = 0
        self.correct_count = 0
        self.incorrect_count = 0
        self.cloze_completed = 0

    def update(self, is_correct: bool):
        self.current += 1
        if is_correct:
            self.correct_count += 1
        else:
            self.incorrect_count += 1

    def record_cloze_completed(self):
        self.cloze_completed += 1

    @property
    def progress_percent(self) -> float:
        if self.total == 0:
            return 100.0
        return (self.current / self.total) * 100

    def render_session_summary(self) -> Panel:
        progress_bar = self._create_progress_bar()

        accuracy = (self.correct_count / self.current * 100) if self.current > 0 else 0

        stats = Table(
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.SIMPLE,
        )
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")

        stats.add_row("Clips", f"{self.current}/{self.total}")
        stats.add_row(
            "Correct",
            Text(f"{self.correct_count}", style=Style(color=SUCCESS_GREEN)),
        )
        stats.add_row(
            "Incorrect",
            Text(f"{self.incorrect_count}", style=Style(color=ERROR_RED)),
        )
        stats.add_row(
            "Accuracy",
            Text(f"{accuracy:.0f}%", style=Style(color=ACCENT_GOLD, bold=True)),
        )
        stats.add_row("Transcripts rebuilt", f"{self.cloze_completed}")

        content = Text()
        content.append("Session Complete!\n\n", Style(color=PRIMARY_BLUE, bold=True))
        content.append(f"Progress: {progress_bar}\n", Style(color=MUTED_GRAY))
        content.append("\n\n")
        content.append("See you next time! 👋\n", Style(color=MUTED_GRAY))

        return Panel(
            Columns(
                [Align.center(content), Align.center(stats)],
                align="center",
                padding=(0, 1),
            ),
            title="Session Summary",
            border_style=ACCENT_GOLD,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def _create_progress_bar(self) -> str:
        width = 30
        filled = int(width * self.progress_percent / 100)
        remaining = width - filled
        bar = "█" * filled + "░" * remaining
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render_session_summary()
