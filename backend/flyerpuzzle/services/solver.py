"""
Flyer Puzzle - Stage Solver (bounded BFS)

Поиск идёт по (позиция, направление), а не только по клеткам:
одна и та же клетка с другим направлением: другое состояние.
"""

import logging
from collections import deque
from itertools import product
from typing import Deque, List, Optional, Sequence, Set, Tuple

from ..config import settings
from .directions import COMMANDS, ensure_command
from .runner import run, transition
from .stage import FlyerState, Stage


logger = logging.getLogger(__name__)

# Фиксированный порядок раскрытия: определяет выбор среди равных по длине решений
SOLVER_COMMAND_ORDER: Tuple[str, ...] = COMMANDS


def solve(
    stage: Stage,
    max_depth: Optional[int] = None,
    commands: Optional[Sequence[str]] = None,
) -> Optional[List[str]]:
    """
    Кратчайшая последовательность команд от старта до цели.

    Returns:
        Список команд или None, если решения нет в пределах max_depth.
    """
    if max_depth is None:
        max_depth = settings.SOLVER_MAX_DEPTH
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    alphabet_source = SOLVER_COMMAND_ORDER if commands is None else commands
    requested = {ensure_command(c) for c in alphabet_source}
    # Порядок раскрытия всегда как в SOLVER_COMMAND_ORDER
    alphabet = tuple(c for c in SOLVER_COMMAND_ORDER if c in requested)

    start = stage.initial_state()
    frontier: Deque[Tuple[FlyerState, List[str]]] = deque([(start, [])])
    visited: Set[FlyerState] = {start}
    explored = 0

    while frontier:
        state, path = frontier.popleft()
        explored += 1

        if state.position == stage.goal:
            logger.debug(f"[Solver] solved: length={len(path)} explored={explored}")
            return path

        if len(path) >= max_depth:
            continue

        for command in alphabet:
            outcome = transition(stage, state, command)
            if outcome.blocked or outcome.state in visited:
                continue
            visited.add(outcome.state)
            frontier.append((outcome.state, path + [command]))

    logger.debug(f"[Solver] no solution within depth={max_depth} explored={explored}")
    return None


def exhaustive_shortest_length(stage: Stage, max_depth: int) -> Optional[int]:
    """
    Длина кратчайшего решения полным перебором (5^depth).

    Медленно, используется для проверки оптимальности BFS.
    """
    for length in range(1, max_depth + 1):
        for sequence in product(SOLVER_COMMAND_ORDER, repeat=length):
            result = run(stage, sequence)
            if result.succeeded and result.index == length - 1:
                return length
    return None
