import pytest

from flyerpuzzle.exceptions import InvalidStage
from flyerpuzzle.services.movement import Position
from flyerpuzzle.services.stage import (
    FlyerState, Stage, stage_from_descriptor, stage_to_descriptor,
)


def make_stage(**overrides):
    params = dict(width=5, height=5, start=Position(2, 4), goal=Position(2, 1), start_heading=0)
    params.update(overrides)
    return Stage(**params)


@pytest.mark.parametrize("overrides", [
    {"width": 0},
    {"height": -1},
    {"goal": Position(2, 4)},
    {"start": Position(5, 0)},
    {"goal": Position(0, 7)},
    {"walls": frozenset({Position(2, 4)})},
    {"walls": frozenset({Position(2, 1)})},
    {"walls": frozenset({Position(9, 9)})},
    {"start_heading": 30},
    {"start_heading": 360},
    {"available_commands": ("forward", "jump")},
    {"command_slot_count": -1},
])
def test_invalid_stages_are_rejected(overrides):
    with pytest.raises(InvalidStage):
        make_stage(**overrides)


def test_tuples_are_normalized_to_positions():
    stage = make_stage(start=(2, 4), walls=[(0, 0)])
    assert stage.start == Position(2, 4)
    assert Position(0, 0) in stage.walls
    assert stage.initial_state() == FlyerState(Position(2, 4), 0)


def test_is_blocked(walled_stage):
    assert walled_stage.is_blocked(Position(2, 3))
    assert walled_stage.is_blocked(Position(-1, 0))
    assert walled_stage.is_blocked(Position(0, 5))
    assert not walled_stage.is_blocked(Position(0, 0))


def test_descriptor_uses_row_col(stage_json):
    stage = stage_from_descriptor(stage_json)
    assert stage.start == Position(2, 4)
    assert stage.goal == Position(2, 1)
    assert stage.command_slot_count == 3


def test_descriptor_round_trip(level_one):
    descriptor = stage_to_descriptor(level_one)
    assert descriptor["start"] == [4, 2]
    assert descriptor["goal"] == [2, 2]
    assert stage_from_descriptor(descriptor, level=1, difficulty="easy") == level_one


@pytest.mark.parametrize("patch", [
    {"gridSize": [5]},
    {"start": [4]},
    {"start": ["a", 2]},
    {"start": ["4", 2]},
    {"walls": [[1, 1.0]]},
    {"gridSize": [5.0, 5]},
    {"startHeading": 45.9},
    {"startHeading": "90"},
    {"commandSlotCount": True},
    {"walls": [[1, 1, 1]]},
    {"walls": "none"},
    {"availableCommands": "forward"},
    {"start": [1, 2]},  # совпадает с целью
])
def test_malformed_descriptor(stage_json, patch):
    stage_json.update(patch)
    with pytest.raises(InvalidStage):
        stage_from_descriptor(stage_json)


def test_descriptor_missing_keys():
    with pytest.raises(InvalidStage, match="goal"):
        stage_from_descriptor({"gridSize": [5, 5], "start": [0, 0]})
