from collections import Counter

import pytest

from flyerpuzzle.exceptions import GenerationFailed, UnknownDifficulty
from flyerpuzzle.services.directions import CARDINAL_HEADINGS
from flyerpuzzle.services.generator import (
    DIFFICULTY_TIERS, SeededRandom, generate, generate_level,
    normalize_difficulty_tier, validate_stage,
)
from flyerpuzzle.services.movement import Position, manhattan_distance
from flyerpuzzle.services.runner import run


class StuckRandom:
    """Всегда выдаёт 0: старт и цель совпадают, любая попытка отбрасывается."""

    def next(self):
        return 0.0

    def next_int(self, min_val, max_val):
        return min_val

    def shuffle(self, arr):
        return list(arr)

    def choice(self, arr):
        return arr[0]


class ScriptedRandom:
    """next_int отдаёт заранее заданные значения, choice: первый элемент."""

    def __init__(self, values):
        self.values = list(values)

    def next(self):
        return 0.0

    def next_int(self, min_val, max_val):
        value = self.values.pop(0)
        assert min_val <= value <= max_val
        return value

    def shuffle(self, arr):
        return list(arr)

    def choice(self, arr):
        return arr[0]


def test_seeded_random_is_reproducible():
    a, b = SeededRandom(42), SeededRandom(42)
    assert [a.next() for _ in range(10)] == [b.next() for _ in range(10)]


def test_seeded_random_ranges():
    rng = SeededRandom(7)
    for _ in range(1000):
        assert 0 <= rng.next() < 1
        assert 0 <= rng.next_int(0, 4) <= 4


def test_seeded_random_shuffle_keeps_items():
    rng = SeededRandom(3)
    items = list(range(10))
    shuffled = rng.shuffle(items)
    assert sorted(shuffled) == items
    assert items == list(range(10))


@pytest.mark.parametrize("seed", range(12))
def test_generated_stage_invariants(seed):
    params = DIFFICULTY_TIERS["easy"]
    stage = generate("easy", SeededRandom(seed))

    assert stage.start != stage.goal
    assert manhattan_distance(stage.start, stage.goal) >= params.min_goal_distance
    assert len(stage.walls) == params.wall_count
    assert stage.start not in stage.walls and stage.goal not in stage.walls
    assert stage.start_heading in CARDINAL_HEADINGS

    solution = stage.solution
    assert 1 <= len(solution) <= params.max_depth
    assert stage.command_slot_count == len(solution)

    result = run(stage, solution)
    assert result.succeeded
    assert result.index == len(solution) - 1

    assert len(stage.available_commands) == len(solution) + params.decoy_count
    assert not Counter(solution) - Counter(stage.available_commands)

    assert validate_stage(stage)["valid"]


def test_same_seed_same_stage():
    assert generate("easy", SeededRandom(99)) == generate("easy", SeededRandom(99))


def test_generate_level_defaults_seed_to_level():
    stage = generate_level(3)
    assert stage.level == 3
    assert stage.seed == 3
    assert stage.difficulty == "easy"
    assert stage == generate_level(3, seed=3)


def test_unknown_difficulty():
    with pytest.raises(UnknownDifficulty):
        generate("nightmare", SeededRandom(1))


def test_difficulty_aliases():
    assert normalize_difficulty_tier(" EASY ") == "easy"
    assert normalize_difficulty_tier("Лёгкий") == "easy"


def test_generation_gives_up():
    with pytest.raises(GenerationFailed) as exc_info:
        generate("easy", StuckRandom(), max_attempts=5)
    assert exc_info.value.attempts == 5
    assert exc_info.value.difficulty == "easy"


def test_validate_stage_reports_broken_solution(level_one):
    import dataclasses

    broken = dataclasses.replace(level_one, solution=("left90",), command_slot_count=3)
    report = validate_stage(broken)

    assert not report["valid"]
    assert report["solution_length"] == 2
    assert any("Stored solution" in e for e in report["errors"])
    assert any("Slot count" in e for e in report["errors"])


def test_close_goal_is_resampled_against_the_same_start():
    rng = ScriptedRandom([
        0, 0,              # старт (0, 0)
        1, 0,              # цель слишком близко
        4, 4,              # цель принята
        4, 0, 0, 4, 2, 0,  # стены
    ])

    stage = generate("easy", rng, max_attempts=2)

    assert stage.start == Position(0, 0)
    assert stage.goal == Position(4, 4)
    assert stage.walls == {Position(4, 0), Position(0, 4), Position(2, 0)}
    assert rng.values == []
