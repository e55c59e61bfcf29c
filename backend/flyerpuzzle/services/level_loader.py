import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..exceptions import InvalidStage
from .generator import generate_level
from .stage import Stage, stage_from_descriptor

logger = logging.getLogger(__name__)

# Folder with level files (relative to this file)
LEVELS_DIR = Path(__file__).parent.parent / "levels"


def _find_level_file(level_num: int, levels_dir: Path) -> Optional[Path]:
    possible_names = [f"level_{level_num}.json", f"{level_num}.json"]
    for name in possible_names:
        path = levels_dir / name
        if path.exists():
            return path
    return None


def _normalize_difficulty(meta: Dict[str, Any]) -> Optional[str]:
    value = meta.get("difficulty")
    if isinstance(value, str) and value.strip():
        return value.strip().lower()
    return None


def load_level_from_file(level_num: int, levels_dir: Optional[Path] = None) -> Optional[Stage]:
    """Load a hand-made stage; None when no file exists for this level.

    Malformed files raise InvalidStage instead of being silently skipped.
    """
    levels_dir = levels_dir or LEVELS_DIR
    file_path = _find_level_file(level_num, levels_dir)
    if not file_path:
        logger.info(f"[LevelLoader] Level file not found for level {level_num}")
        return None

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw_data = json.load(f)
    except json.JSONDecodeError as exc:
        raise InvalidStage(f"Level file {file_path.name} is not valid JSON: {exc}") from exc

    if not isinstance(raw_data, dict):
        raise InvalidStage(f"Level file {file_path.name} must contain an object")

    meta = raw_data.get("meta") or {}
    stage = stage_from_descriptor(
        raw_data,
        level=level_num,
        difficulty=_normalize_difficulty(meta),
    )

    logger.info(
        f"[LevelLoader] Level {level_num}: grid={stage.width}x{stage.height} "
        f"walls={len(stage.walls)} slots={stage.command_slot_count}"
    )
    return stage


def get_stage(level_num: int, levels_dir: Optional[Path] = None) -> Stage:
    """Hand-made stage if there is a file for it, generated stage otherwise."""
    stage = load_level_from_file(level_num, levels_dir)
    if stage is not None:
        return stage
    return generate_level(level_num)
