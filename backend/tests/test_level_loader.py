import json

import pytest

from flyerpuzzle.exceptions import InvalidStage
from flyerpuzzle.services.generator import validate_stage
from flyerpuzzle.services.level_loader import LEVELS_DIR, get_stage, load_level_from_file
from flyerpuzzle.services.movement import Position


def test_original_stage_is_loaded(level_one):
    assert level_one.level == 1
    assert (level_one.width, level_one.height) == (5, 5)
    assert level_one.start == Position(2, 4)
    assert level_one.goal == Position(2, 2)
    assert level_one.start_heading == 0
    assert len(level_one.walls) == 6
    assert level_one.command_slot_count == 5
    assert level_one.difficulty == "easy"
    assert level_one.solution is None


def test_missing_level_returns_none():
    assert load_level_from_file(999) is None


def test_get_stage_falls_back_to_generator():
    stage = get_stage(999)
    assert stage.level == 999
    assert stage.seed == 999
    assert stage.solution is not None


@pytest.mark.parametrize("path", sorted(LEVELS_DIR.glob("*.json")), ids=lambda p: p.name)
def test_shipped_levels_are_solvable(path):
    level_num = int(path.stem.removeprefix("level_"))
    report = validate_stage(load_level_from_file(level_num))
    assert report["valid"], report["errors"]


def test_alternate_file_name(tmp_path):
    (tmp_path / "7.json").write_text(json.dumps({
        "gridSize": [3, 3],
        "start": [2, 0],
        "goal": [0, 2],
        "availableCommands": ["right45", "forward"],
        "commandSlotCount": 2,
    }), encoding="utf-8")

    stage = load_level_from_file(7, levels_dir=tmp_path)
    assert stage.start == Position(0, 2)
    assert stage.goal == Position(2, 0)
    assert stage.difficulty is None


def test_broken_json(tmp_path):
    (tmp_path / "level_1.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidStage):
        load_level_from_file(1, levels_dir=tmp_path)


def test_invalid_stage_file(tmp_path):
    (tmp_path / "level_1.json").write_text(json.dumps({
        "gridSize": [3, 3],
        "start": [1, 1],
        "goal": [0, 0],
        "walls": [[1, 1]],
    }), encoding="utf-8")
    with pytest.raises(InvalidStage, match="Start cell is a wall"):
        load_level_from_file(1, levels_dir=tmp_path)


def test_string_coordinates_are_rejected(tmp_path):
    (tmp_path / "level_1.json").write_text(json.dumps({
        "gridSize": [3, 3],
        "start": ["1", 2],
        "goal": [0, 0],
    }), encoding="utf-8")
    with pytest.raises(InvalidStage, match="must be an integer"):
        load_level_from_file(1, levels_dir=tmp_path)
