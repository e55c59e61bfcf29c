"""
Flyer Puzzle - Stage Generator (Server)

Rejection sampling:
✅ Старт и цель далеко друг от друга (Manhattan >= min_goal_distance)
✅ Стены не пересекаются со стартом, целью и друг другом
✅ Решение найдено BFS-солвером (доказательство проходимости)
✅ Число попыток ограничено → GenerationFailed вместо зависания
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from ..config import settings
from ..exceptions import GenerationFailed, UnknownDifficulty
from .directions import CARDINAL_HEADINGS, COMMANDS
from .movement import Position, manhattan_distance
from .runner import run
from .solver import solve
from .stage import Stage


logger = logging.getLogger(__name__)


# ============================================
# SEEDED RANDOM
# ============================================

class SeededRandom:
    """
    Детерминированный PRNG для воспроизводимости уровней.

    Генератор принимает любой объект с методами next/next_int/shuffle/choice.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed & 0x7FFFFFFF

    def next(self) -> float:
        """Возвращает число от 0 (включительно) до 1 (не включительно)."""
        self._state = (self._state * 1103515245 + 12345) & 0x7FFFFFFF
        return self._state / 0x80000000

    def next_int(self, min_val: int, max_val: int) -> int:
        """Возвращает целое число в диапазоне [min, max]."""
        if min_val > max_val:
            return min_val
        return min_val + int(self.next() * (max_val - min_val + 1))

    def shuffle(self, arr: list) -> list:
        """Fisher-Yates shuffle."""
        result = arr.copy()
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def choice(self, arr):
        """Случайный элемент массива."""
        if not arr:
            return None
        return arr[self.next_int(0, len(arr) - 1)]


# ============================================
# DIFFICULTY TIERS
# ============================================

@dataclass(frozen=True)
class DifficultyParams:
    width: int
    height: int
    min_goal_distance: int
    wall_count: int
    decoy_count: int
    max_depth: int


DIFFICULTY_TIERS: Dict[str, DifficultyParams] = {
    "easy": DifficultyParams(
        width=5,
        height=5,
        min_goal_distance=4,
        wall_count=3,
        decoy_count=2,
        max_depth=6,
    ),
}

TIER_ALIASES = {
    "easy": "easy",
    "легкий": "easy",
}


def normalize_difficulty_tier(value: Any) -> str:
    if isinstance(value, str):
        text = " ".join(value.strip().lower().replace("ё", "е").split())
        tier = TIER_ALIASES.get(text)
        if tier is not None:
            return tier
    raise UnknownDifficulty(f"Unknown difficulty tier: {value!r}")


def get_difficulty_params(difficulty: Any) -> DifficultyParams:
    return DIFFICULTY_TIERS[normalize_difficulty_tier(difficulty)]


# ============================================
# PLACEMENT
# ============================================

def random_cell(width: int, height: int, rng) -> Position:
    return Position(rng.next_int(0, width - 1), rng.next_int(0, height - 1))


def place_walls(
    params: DifficultyParams,
    start: Position,
    goal: Position,
    rng,
) -> Optional[Set[Position]]:
    """
    Ставит wall_count стен, отбрасывая попадания в старт, цель и уже
    поставленные стены. None если свободных клеток не хватает.
    """
    free_cells = params.width * params.height - 2
    if params.wall_count > free_cells:
        return None

    walls: Set[Position] = set()
    while len(walls) < params.wall_count:
        cell = random_cell(params.width, params.height, rng)
        if cell == start or cell == goal or cell in walls:
            continue
        walls.add(cell)
    return walls


# ============================================
# MAIN GENERATOR FUNCTION
# ============================================

def generate(difficulty: str, rng, max_attempts: Optional[int] = None) -> Stage:
    """
    Генерирует проходимый уровень.

    Каждая отброшенная выборка расходует одну попытку. Цель слишком
    близко: перевыбирается только цель. Нет решения или оно длиннее
    max_depth: заготовка строится заново с нового старта.

    Raises:
        UnknownDifficulty: нет параметров для уровня сложности
        GenerationFailed: попытки кончились
    """
    tier = normalize_difficulty_tier(difficulty)
    params = DIFFICULTY_TIERS[tier]
    if max_attempts is None:
        max_attempts = settings.GENERATOR_MAX_ATTEMPTS

    attempt = 0
    start: Optional[Position] = None
    while attempt < max_attempts:
        attempt += 1
        if start is None:
            start = random_cell(params.width, params.height, rng)

        # Слишком близкая цель перевыбирается при том же старте
        goal = random_cell(params.width, params.height, rng)
        if manhattan_distance(start, goal) < params.min_goal_distance:
            continue

        start, candidate_start = None, start
        walls = place_walls(params, candidate_start, goal, rng)
        if walls is None:
            continue

        heading = rng.choice(CARDINAL_HEADINGS)

        candidate = Stage(
            width=params.width,
            height=params.height,
            start=candidate_start,
            goal=goal,
            start_heading=heading,
            walls=frozenset(walls),
        )

        solution = solve(candidate, params.max_depth)
        if not solution or len(solution) > params.max_depth:
            continue

        # Декои выбираются независимо и могут совпасть с нужными командами
        decoys = [rng.choice(COMMANDS) for _ in range(params.decoy_count)]
        pool = rng.shuffle(solution + decoys)

        logger.info(
            f"[Generator] tier={tier} attempts={attempt} "
            f"solution_length={len(solution)} walls={len(walls)}"
        )

        return dataclasses.replace(
            candidate,
            available_commands=tuple(pool),
            command_slot_count=len(solution),
            solution=tuple(solution),
            difficulty=tier,
        )

    logger.error(f"[Generator] tier={tier} gave up after {max_attempts} attempts")
    raise GenerationFailed(tier, max_attempts)


def generate_level(level: int, seed: Optional[int] = None, difficulty: Optional[str] = None) -> Stage:
    """Уровень по номеру; без seed используется номер уровня."""
    if seed is None:
        seed = level
    if difficulty is None:
        difficulty = settings.DEFAULT_DIFFICULTY

    rng = SeededRandom(seed)
    stage = generate(difficulty, rng)
    return dataclasses.replace(stage, level=level, seed=seed)


# ============================================
# VALIDATION
# ============================================

def validate_stage(stage: Stage, max_depth: Optional[int] = None) -> Dict:
    """Проверяет проходимость и согласованность уровня."""
    if max_depth is None:
        max_depth = settings.SOLVER_MAX_DEPTH

    errors: List[str] = []

    solution = solve(stage, max_depth)
    if solution is None:
        errors.append(f"Stage not solvable within {max_depth} commands")

    if stage.solution is not None:
        replay = run(stage, stage.solution)
        if not replay.succeeded or replay.index != len(stage.solution) - 1:
            errors.append("Stored solution does not reach the goal on its last command")

        if stage.command_slot_count != len(stage.solution):
            errors.append(
                f"Slot count {stage.command_slot_count} != solution length {len(stage.solution)}"
            )

        pool = list(stage.available_commands)
        for command in stage.solution:
            if command in pool:
                pool.remove(command)
            else:
                errors.append(f"Command pool is missing '{command}' needed by the solution")
                break

    if solution is not None and stage.command_slot_count and len(solution) > stage.command_slot_count:
        errors.append(
            f"Shortest solution ({len(solution)}) does not fit into {stage.command_slot_count} slots"
        )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "solution_length": len(solution) if solution is not None else None,
    }


# ============================================
# CLI TESTING
# ============================================

if __name__ == "__main__":
    import time

    print("🐦 Flyer Puzzle Generator")
    print("=" * 60)

    for lvl in [1, 2, 3, 10, 100]:
        started = time.time()
        result = generate_level(lvl)
        elapsed = (time.time() - started) * 1000

        validation = validate_stage(result)
        status = "✅" if validation["valid"] else "❌"
        print(f"\nLevel {lvl:4d} {status} | {elapsed:6.1f}ms")
        print(f"  Start: {tuple(result.start)} heading={result.start_heading}")
        print(f"  Goal: {tuple(result.goal)}")
        print(f"  Walls: {sorted(tuple(w) for w in result.walls)}")
        print(f"  Solution: {list(result.solution)}")
        print(f"  Pool: {list(result.available_commands)}")

        for err in validation["errors"]:
            print(f"     - {err}")

    print("\n" + "=" * 60)
