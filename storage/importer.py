"""Import clip definitions from JSON into the database."""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from .connection import DEFAULT_DB_PATH, init_schema, migrate_if_needed
from .sqlite import SQLiteClipRepository
from models import Clip

logger = logging.getLogger(__name__)

_CLIP_LIST = TypeAdapter(list[Clip])


def load_clips_json(json_path: Path) -> list[Clip]:
    """Load and validate clips from a JSON file.

    Accepts both snake_case keys and the camelCase keys used by the mobile
    app's clips.json (``audioId``, ``answerIndex``).

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If any clip is malformed.
    """
    with open(json_path, encoding="utf-8") as f:
        items = json.load(f)

    for item in items:
        if "audioId" in item:
            item["audio_id"] = item.pop("audioId")
        if "answerIndex" in item:
            item["answer_index"] = item.pop("answerIndex")

    return _CLIP_LIST.validate_python(items)


def import_clips(json_path: Path, db_path: Path = DEFAULT_DB_PATH) -> int:
    """Create the schema if needed and upsert every clip in ``json_path``.

    Returns:
        Number of clips imported.
    """
    clips = load_clips_json(json_path)
    init_schema(db_path)
    migrate_if_needed(db_path)
    count = SQLiteClipRepository(db_path).save_all(clips)
    logger.info("imported %d clips from %s", count, json_path.name)
    return count
