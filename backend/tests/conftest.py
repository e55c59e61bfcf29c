import pytest

from flyerpuzzle.services.level_loader import load_level_from_file
from flyerpuzzle.services.movement import Position
from flyerpuzzle.services.stage import Stage


@pytest.fixture
def open_stage() -> Stage:
    """5x5, старт (row4, col2) смотрит вверх, цель (row1, col2), без стен."""
    return Stage(
        width=5,
        height=5,
        start=Position(2, 4),
        goal=Position(2, 1),
        start_heading=0,
        available_commands=("forward", "forward", "forward"),
        command_slot_count=3,
    )


@pytest.fixture
def walled_stage() -> Stage:
    """Как open_stage, но стена прямо над стартом (row3, col2)."""
    return Stage(
        width=5,
        height=5,
        start=Position(2, 4),
        goal=Position(2, 1),
        start_heading=0,
        walls=frozenset({Position(2, 3)}),
    )


@pytest.fixture
def level_one() -> Stage:
    return load_level_from_file(1)


@pytest.fixture
def level_two() -> Stage:
    return load_level_from_file(2)


@pytest.fixture
def stage_json():
    return {
        "gridSize": [5, 5],
        "start": [4, 2],
        "startHeading": 0,
        "goal": [1, 2],
        "walls": [],
        "availableCommands": ["forward", "forward", "forward"],
        "commandSlotCount": 3,
    }
