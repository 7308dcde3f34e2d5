"""Integration tests for the command handlers in main.py.

These tests simulate user input through stdin by mocking Console.input().
"""

import io
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

import main
from storage import SQLiteClipRepository, SQLiteProgressRepository
from ui import DEFAULT_THEME, TutorUI


class InputSequence:
    """Callable providing sequential inputs for mocked Console.input().

    Tracks all prompts received for debugging failed tests.
    """

    def __init__(self, inputs: list[str]):
        self.inputs = inputs
        self.index = 0
        self.call_history: list[tuple[int, Any]] = []

    def __call__(self, prompt: Any = "") -> str:
        """Return next input in sequence, tracking prompts received."""
        self.call_history.append((self.index, prompt))
        if self.index >= len(self.inputs):
            history = "\n".join(f"  {i}: {p}" for i, p in self.call_history)
            raise StopIteration(
                f"Ran out of inputs at call {self.index}.\n"
                f"Prompt: {prompt}\n"
                f"History:\n{history}"
            )
        result = self.inputs[self.index]
        self.index += 1
        return result

    @property
    def remaining(self) -> int:
        """Number of unused inputs remaining."""
        return len(self.inputs) - self.index


@pytest.fixture
def config_path(tmp_path) -> Path:
    """Generator config that keeps the word pool in transcript order."""
    path = tmp_path / "config.json"
    path.write_text('{"cloze": {"shuffle_pool": false}}')
    return path


@pytest.fixture
def ui() -> TutorUI:
    """UI writing to an in-memory console."""
    return TutorUI(Console(file=io.StringIO(), width=120, theme=DEFAULT_THEME))


def output_of(ui: TutorUI) -> str:
    return ui.console.file.getvalue()


@pytest.fixture
def practice_runner(populated_test_db, config_path, monkeypatch, ui):
    """Fixture providing a patched run_practice runner.

    Patches:
    - Console.input to use provided InputSequence
    - Console.clear to no-op (avoid terminal issues)
    - signal.signal to no-op (avoid handler issues in tests)

    Returns a callable that takes an InputSequence plus CLI arguments and
    runs the session against the populated test database.
    """
    monkeypatch.setattr("signal.signal", lambda *args, **kwargs: None)
    monkeypatch.setattr(Console, "clear", lambda self: None)

    def runner(input_sequence: InputSequence, *cli_args: str) -> Path:
        monkeypatch.setattr(Console, "input", input_sequence)
        args = main.create_parser().parse_args(
            [
                "--db",
                str(populated_test_db),
                "--config",
                str(config_path),
                "--seed",
                "42",
                "practice",
                *cli_args,
            ]
        )
        try:
            main.run_practice(args, ui)
        except StopIteration:
            pass  # Expected when inputs exhausted
        except SystemExit:
            pass  # Expected on quit

        return populated_test_db

    return runner


class TestPracticeFlow:
    """Tests for a full practice pass over one clip."""

    def test_correct_answer_and_rebuilt_transcript(self, practice_runner, ui):
        inputs = InputSequence(
            [
                "",  # Welcome - press Enter
                "n",  # Don't show transcript
                "A",  # "On the mat" is correct
                "1",  # Pool is in order: The cat on the mat.
                "1",
                "1",
                "1",
                "1",
                "",  # Press Enter to continue
            ]
        )

        db_path = practice_runner(inputs, "--clip", "L1-001")

        assert inputs.remaining == 0
        progress = SQLiteProgressRepository(db_path).get("L1-001")
        assert progress.attempts == 1
        assert progress.corrects == 1
        assert progress.last_played_at is not None
        assert progress.fsrs_state is not None

        tracker = ui.get_progress_tracker()
        assert tracker.correct_count == 1
        assert tracker.cloze_completed == 1

        output = output_of(ui)
        assert "Correct!" in output
        assert "Session Summary" in output

    def test_wrong_answer_then_undo(self, practice_runner, ui):
        inputs = InputSequence(
            [
                "",  # Welcome
                "n",
                "B",  # Wrong choice
                "2",  # "cat" before "The": wrong pick
                "1",  # Refused while the wrong pick stands
                "u",  # Undo puts "cat" at the end of the pool
                "1",  # The
                "4",  # cat
                "1",  # on
                "1",  # the
                "1",  # mat.
                "",  # Continue
            ]
        )

        db_path = practice_runner(inputs, "--clip", "L1-001")

        assert inputs.remaining == 0
        progress = SQLiteProgressRepository(db_path).get("L1-001")
        assert progress.attempts == 1
        assert progress.corrects == 0

        output = output_of(ui)
        assert "Not quite!" in output
        assert "doesn't go there" in output
        assert "Returned 'cat'." in output
        assert ui.get_progress_tracker().cloze_completed == 1

    def test_invalid_choice_is_retried(self, practice_runner, ui):
        inputs = InputSequence(["", "n", "z", "A", "q"])

        db_path = practice_runner(inputs, "--clip", "L1-001")

        assert inputs.remaining == 0
        assert SQLiteProgressRepository(db_path).get("L1-001").corrects == 1
        assert "Please enter A, B, C, D" in output_of(ui)

    def test_show_transcript(self, practice_runner, ui):
        inputs = InputSequence(["", "y", "q"])
        practice_runner(inputs, "--clip", "L1-001")
        assert "The cat sat on the mat." in output_of(ui)


class TestQuit:
    """Tests for leaving a session early."""

    def test_quit_at_question(self, practice_runner, ui):
        inputs = InputSequence(["", "n", "q"])

        db_path = practice_runner(inputs, "--clip", "L1-001")

        progress = SQLiteProgressRepository(db_path).get("L1-001")
        assert progress.attempts == 0
        assert progress.last_played_at is not None
        assert "Goodbye" in output_of(ui)

    def test_quit_during_cloze_keeps_answer(self, practice_runner, ui):
        inputs = InputSequence(["", "n", "A", "1", "q"])

        db_path = practice_runner(inputs, "--clip", "L1-001")

        assert SQLiteProgressRepository(db_path).get("L1-001").attempts == 1
        assert ui.get_progress_tracker().cloze_completed == 0
        assert "Goodbye" in output_of(ui)


class TestQueue:
    """Tests for choosing which clips to practice."""

    def test_filters_by_level_and_genre(self, practice_runner, ui):
        inputs = InputSequence(
            ["", "n", "B", "1", "1", "1", "1", "1", ""]  # "By train" is correct
        )

        db_path = practice_runner(inputs, "--level", "1", "--genre", "Travel")

        assert inputs.remaining == 0
        progress = SQLiteProgressRepository(db_path).get_all()
        assert set(progress) == {"L1-002"}
        assert progress["L1-002"].corrects == 1

    def test_answered_clip_is_no_longer_due(self, practice_runner, ui):
        practice_runner(
            InputSequence(["", "n", "B", "1", "1", "1", "1", "1", ""]),
            "--level",
            "1",
            "--genre",
            "Travel",
        )

        inputs = InputSequence([""])
        practice_runner(inputs, "--level", "1", "--genre", "Travel")

        assert inputs.remaining == 0
        assert "all caught up" in output_of(ui)

    def test_filters_by_status(self, practice_runner, populated_test_db, ui):
        SQLiteProgressRepository(populated_test_db).toggle_bookmark("L1-002")
        inputs = InputSequence(["", "n", "B", "1", "1", "1", "1", "1", ""])

        practice_runner(inputs, "--status", "bookmarked")

        assert inputs.remaining == 0
        progress = SQLiteProgressRepository(populated_test_db).get("L1-002")
        assert progress.corrects == 1
        assert SQLiteProgressRepository(populated_test_db).get("L1-001").attempts == 0

    def test_status_with_nothing_due(self, practice_runner, ui):
        inputs = InputSequence([""])
        practice_runner(inputs, "--status", "review")
        assert "all caught up" in output_of(ui)

    def test_unknown_clip(self, practice_runner, ui):
        practice_runner(InputSequence([]), "--clip", "missing")
        assert "Clip missing not found." in output_of(ui)

    def test_empty_library(self, tmp_path, monkeypatch, ui):
        monkeypatch.setattr(Console, "clear", lambda self: None)
        args = main.create_parser().parse_args(["--db", str(tmp_path / "empty.db")])

        main.run_practice(args, ui)

        assert "No clips found" in output_of(ui)


class TestOtherCommands:
    """Tests for the list, import and bookmark commands."""

    def test_import(self, tmp_path, clips_json_path, ui):
        db_path = tmp_path / "imported.db"
        args = main.create_parser().parse_args(
            ["--db", str(db_path), "import", str(clips_json_path)]
        )

        main.run_import(args, ui)

        assert "Imported 2 clips" in output_of(ui)
        assert len(SQLiteClipRepository(db_path).get_all()) == 2

    def test_import_missing_file(self, tmp_path, ui):
        args = main.create_parser().parse_args(
            ["--db", str(tmp_path / "x.db"), "import", str(tmp_path / "nope.json")]
        )
        main.run_import(args, ui)
        assert "not found" in output_of(ui)

    def test_bookmark_toggles(self, populated_test_db, ui):
        args = main.create_parser().parse_args(
            ["--db", str(populated_test_db), "bookmark", "L2-001"]
        )

        main.run_bookmark(args, ui)
        assert SQLiteProgressRepository(populated_test_db).get("L2-001").is_bookmarked

        main.run_bookmark(args, ui)
        assert not SQLiteProgressRepository(populated_test_db).get("L2-001").is_bookmarked
        assert "no longer bookmarked" in output_of(ui)

    def test_bookmark_unknown_clip(self, populated_test_db, ui):
        args = main.create_parser().parse_args(
            ["--db", str(populated_test_db), "bookmark", "missing"]
        )
        main.run_bookmark(args, ui)
        assert "Clip missing does not exist" in output_of(ui)

    def test_list_bookmarked(self, populated_test_db, ui):
        SQLiteProgressRepository(populated_test_db).toggle_bookmark("L3-001")
        args = main.create_parser().parse_args(
            ["--db", str(populated_test_db), "list", "--status", "bookmarked"]
        )

        main.run_list(args, ui)

        output = output_of(ui)
        assert "L3-001" in output
        assert "L1-001" not in output
        assert "Genres: All, Daily Life, Science, Story, Travel" in output
        assert "Level progress: L1 0%, L2 0%, L3 0%" in output

    def test_list_by_status(self, populated_test_db, ui):
        progress_repo = SQLiteProgressRepository(populated_test_db)
        progress_repo.record_answer("L1-001", True)
        progress_repo.record_answer("L1-002", False)
        args = main.create_parser().parse_args(
            ["--db", str(populated_test_db), "list", "--status", "review"]
        )

        main.run_list(args, ui)

        output = output_of(ui)
        assert "L1-002" in output
        assert "L1-001" not in output
        assert "L2-001" not in output
        assert "Level progress: L1 50%, L2 0%, L3 0%" in output

    def test_list_rejects_unknown_status(self, populated_test_db):
        with pytest.raises(SystemExit):
            main.create_parser().parse_args(
                ["--db", str(populated_test_db), "list", "--status", "mastered"]
            )

    def test_list_by_level(self, populated_test_db, ui):
        args = main.create_parser().parse_args(
            ["--db", str(populated_test_db), "list", "--level", "2"]
        )
        main.run_list(args, ui)

        output = output_of(ui)
        assert "L2-001" in output
        assert "L1-002" not in output


def test_parser_defaults():
    args = main.create_parser().parse_args([])
    assert args.command is None
    assert args.db == main.DEFAULT_DB_PATH
    assert args.seed is None
    assert not args.verbose
