import argparse
import logging
import random
import signal
import sys
from pathlib import Path

from rich.logging import RichHandler

from exercises import (
    ClozeHandler,
    ExerciseGeneratorConfig,
    ExerciseSession,
    MultipleChoiceGenerator,
    MultipleChoiceHandler,
    load_config,
)
from library import ClipLibrary
from models import Clip, StatusFilter
from storage import (
    DEFAULT_DB_PATH,
    ClipNotFoundError,
    get_clip_repo,
    get_progress_repo,
    import_clips,
    init_schema,
    migrate_if_needed,
)
from ui import TutorUI

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CLIPS_JSON = DATA_DIR / "clips.json"


def add_status_argument(parser: argparse.ArgumentParser) -> None:
    """Add the library status filter shared by practice and list."""
    parser.add_argument(
        "--status",
        "-s",
        type=StatusFilter,
        choices=list(StatusFilter),
        default=StatusFilter.ALL,
        metavar="{" + ",".join(s.value for s in StatusFilter) + "}",
        help="Only clips with this status (review = tried, never correct)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="Listening Tutor")
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"SQLite database path (default: {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with exercise generation settings",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible shuffles",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    practice_parser = subparsers.add_parser(
        "practice", help="Practice clips (default command)"
    )
    practice_parser.add_argument(
        "--level", "-l", type=int, default=None, help="Only clips of this level"
    )
    practice_parser.add_argument(
        "--genre", "-g", type=str, default=None, help="Only clips of this genre"
    )
    practice_parser.add_argument(
        "--clip", "-c", type=str, default=None, help="Practice a single clip by ID"
    )
    practice_parser.add_argument(
        "--full-reorder",
        action="store_true",
        help="Reorder the whole transcript instead of filling blanks",
    )
    add_status_argument(practice_parser)

    list_parser = subparsers.add_parser("list", help="Show the clip library")
    list_parser.add_argument("--level", "-l", type=int, default=None)
    list_parser.add_argument("--genre", "-g", type=str, default=None)
    add_status_argument(list_parser)

    import_parser = subparsers.add_parser("import", help="Import clips from JSON")
    import_parser.add_argument(
        "json_path",
        type=Path,
        nargs="?",
        default=DEFAULT_CLIPS_JSON,
        help=f"Clips JSON file (default: {DEFAULT_CLIPS_JSON})",
    )

    bookmark_parser = subparsers.add_parser("bookmark", help="Toggle a bookmark")
    bookmark_parser.add_argument("clip_id", type=str)

    return parser


def configure_logging(verbose: bool) -> None:
    """Route log records through rich, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


def open_library(db_path: Path) -> ClipLibrary:
    """Prepare the database and load clips with their progress."""
    init_schema(db_path)
    migrate_if_needed(db_path)
    clips = get_clip_repo(db_path).get_all()
    progress = get_progress_repo(db_path).get_all()
    return ClipLibrary(clips, progress)


def handle_quit(ui: TutorUI) -> None:
    """Print quit message and exit. Progress is saved as it is recorded."""
    ui.show_quit_message()
    sys.exit(0)


def create_sigint_handler(ui: TutorUI):
    """Create a SIGINT handler that exits cleanly."""

    def sigint_handler(signum, frame):
        handle_quit(ui)

    return sigint_handler


def practice_clip(
    ui: TutorUI,
    clip: Clip,
    config: ExerciseGeneratorConfig,
    db_path: Path,
    rng: random.Random,
    clip_number: int,
    total_clips: int,
    full_reorder: bool = False,
) -> bool:
    """Run the quiz and the cloze exercise for one clip.

    Returns:
        False if the user quit, True otherwise.
    """
    progress_repo = get_progress_repo(db_path)
    progress_repo.record_play(clip.id)

    ui.show_clip(clip)
    if ui.ask_show_transcript():
        ui.show_clip(clip, show_transcript=True)

    exercise = MultipleChoiceGenerator(config.multiple_choice, rng).from_clip(clip)
    if exercise is not None:
        handler = MultipleChoiceHandler(exercise)
        user_input = ui.ask_multiple_choice(handler, clip_number, total_clips)
        if user_input == "quit":
            return False

        _, is_correct, correct_answer = handler.process_user_input_with_input(
            user_input
        )
        progress_repo.record_answer(clip.id, bool(is_correct))
        ui.update_progress(bool(is_correct))
        ui.show_feedback(
            bool(is_correct),
            correct_answer,
            user_input,
            explanation=exercise.explanation or None,
        )
    else:
        logger.warning("clip %s has no usable question, skipping quiz", clip.id)

    session = ExerciseSession.new(
        clip.transcript,
        clip.level,
        config=config.cloze,
        rng=rng,
        on_complete=ui.record_cloze_completed,
        full_reorder=full_reorder,
        source_id=clip.id,
    )
    if not ui.run_cloze(ClozeHandler(session)):
        return False

    ui.wait_for_continue()
    return True


def run_practice(args, ui: TutorUI | None = None) -> None:
    """Run the interactive practice session."""
    ui = ui or TutorUI()
    rng = random.Random(args.seed)
    config = load_config(args.config)

    ui.clear_screen()
    library = open_library(args.db)

    if not library.clips:
        ui.show_error("No clips found. Run the 'import' command first.")
        return

    clip_id = getattr(args, "clip", None)
    if clip_id:
        clip = library.get(clip_id)
        if clip is None:
            ui.show_error(f"Clip {clip_id} not found.")
            return
        queue = [clip]
    else:
        queue = library.due_clips(
            level=getattr(args, "level", None),
            genre=getattr(args, "genre", None),
            status=getattr(args, "status", StatusFilter.ALL),
        )

    signal.signal(signal.SIGINT, create_sigint_handler(ui))

    ui.show_welcome(clip_count=len(library.clips), due_count=len(queue))

    if not queue:
        ui.show_no_clips_due()
        return

    ui.create_progress_tracker(len(queue))

    for clip_index, clip in enumerate(queue):
        ui.clear_screen()
        if not practice_clip(
            ui,
            clip,
            config,
            args.db,
            rng,
            clip_number=clip_index + 1,
            total_clips=len(queue),
            full_reorder=getattr(args, "full_reorder", False),
        ):
            ui.show_quit_message()
            break

    tracker = ui.get_progress_tracker()
    if tracker:
        ui.show_session_complete(tracker)


def run_list(args, ui: TutorUI | None = None) -> None:
    """Show the clip library with progress."""
    ui = ui or TutorUI()
    library = open_library(args.db)

    clips = library.filter(level=args.level, genre=args.genre, status=args.status)

    ui.show_library(clips, library.progress)
    ui.show_level_progress(
        {level: library.get_level_progress(level) for level in library.levels()}
    )
    ui.show_info("Genres: " + ", ".join(library.all_genres()))


def run_import(args, ui: TutorUI | None = None) -> None:
    """Import clips from a JSON file into the database."""
    ui = ui or TutorUI()
    if not args.json_path.exists():
        ui.show_error(f"{args.json_path} not found.")
        return

    count = import_clips(args.json_path, args.db)
    ui.show_success(f"Imported {count} clips into {args.db}")


def run_bookmark(args, ui: TutorUI | None = None) -> None:
    """Toggle the bookmark on a clip."""
    ui = ui or TutorUI()
    init_schema(args.db)
    try:
        is_bookmarked = get_progress_repo(args.db).toggle_bookmark(args.clip_id)
    except ClipNotFoundError as e:
        ui.show_error(str(e))
        return

    state = "bookmarked" if is_bookmarked else "no longer bookmarked"
    ui.show_info(f"{args.clip_id} is {state}.")


def main():
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    if args.command == "list":
        run_list(args)
    elif args.command == "import":
        run_import(args)
    elif args.command == "bookmark":
        run_bookmark(args)
    else:
        # Default to interactive practice
        run_practice(args)


if __name__ == "__main__":
    main()
