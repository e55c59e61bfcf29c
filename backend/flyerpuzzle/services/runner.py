"""
Flyer Puzzle - Command Sequence Runner

Проигрывает список команд от стартового состояния.

Один и тот же пошаговый алгоритм (iter_steps) используется для:
- preview (точки пути без побочных эффектов)
- run (мгновенное выполнение с колбэком на каждый шаг)
- pacing.play (выполнение с паузами для анимации)
Поэтому превью и выполнение никогда не расходятся.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .directions import apply_command, ensure_command
from .movement import step
from .stage import FlyerState, Stage


SUCCESS = "success"
WALL_COLLISION = "wall_collision"
EXHAUSTED = "exhausted"

OUTCOME_MESSAGES = {
    SUCCESS: "Cleared! Well done!",
    WALL_COLLISION: "Failed! You hit a wall.",
    EXHAUSTED: "Failed! You did not reach the target.",
}


class StepOutcome(NamedTuple):
    """
    Результат одного шага.

    state: новое состояние; при blocked это клетка, в которую птица
    пыталась влететь (она не принимается).
    """
    state: FlyerState
    blocked: bool
    reached_goal: bool


@dataclass
class ExecutionResult:
    """Success(index) / WallCollision(index) / Exhausted + пройденные состояния."""
    outcome: str
    index: Optional[int] = None
    states: List[FlyerState] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.outcome == SUCCESS

    @property
    def collided(self) -> bool:
        return self.outcome == WALL_COLLISION

    @property
    def final_state(self) -> Optional[FlyerState]:
        return self.states[-1] if self.states else None


StepCallback = Callable[[int, str, StepOutcome], None]


# ============================================
# SINGLE STEP
# ============================================

def transition(stage: Stage, state: FlyerState, command: str) -> StepOutcome:
    """Повернуть, затем шагнуть вперёд по новому направлению."""
    heading = apply_command(state.heading, command)
    position = step(state.position, heading)
    attempted = FlyerState(position, heading)

    if stage.is_blocked(position):
        return StepOutcome(attempted, blocked=True, reached_goal=False)

    return StepOutcome(attempted, blocked=False, reached_goal=position == stage.goal)


def iter_steps(stage: Stage, commands: Sequence[str]) -> Iterator[Tuple[int, StepOutcome]]:
    """
    Пошагово проигрывает команды.

    Останавливается после первого столкновения или первого касания цели,
    оставшиеся команды не выполняются.
    """
    for command in commands:
        ensure_command(command)

    state = stage.initial_state()
    for index, command in enumerate(commands):
        outcome = transition(stage, state, command)
        yield index, outcome

        if outcome.blocked or outcome.reached_goal:
            return
        state = outcome.state


# ============================================
# RUN / PREVIEW
# ============================================

class ResultRecorder:
    """
    Собирает ExecutionResult из шагов iter_steps.

    Общий для run() и pacing.play(), поэтому исходы у них одинаковые.
    """

    def __init__(self):
        self.states: List[FlyerState] = []

    def record(self, index: int, outcome: StepOutcome) -> Optional[ExecutionResult]:
        """Итоговый результат, если на этом шаге выполнение закончилось, иначе None."""
        if outcome.blocked:
            return ExecutionResult(WALL_COLLISION, index, self.states)

        self.states.append(outcome.state)
        if outcome.reached_goal:
            return ExecutionResult(SUCCESS, index, self.states)
        return None

    def exhausted(self) -> ExecutionResult:
        return ExecutionResult(EXHAUSTED, None, self.states)


def collect_result(steps: Iterator[Tuple[int, StepOutcome]], commands: Sequence[str],
                   on_step: Optional[StepCallback] = None) -> ExecutionResult:
    recorder = ResultRecorder()

    for index, outcome in steps:
        if on_step is not None:
            on_step(index, commands[index], outcome)

        result = recorder.record(index, outcome)
        if result is not None:
            return result

    return recorder.exhausted()


def run(stage: Stage, commands: Sequence[str], on_step: Optional[StepCallback] = None) -> ExecutionResult:
    """
    Выполняет команды мгновенно.

    on_step(index, command, outcome) вызывается синхронно на каждом шаге
    (включая шаг со столкновением) и не влияет на результат.
    """
    commands = list(commands)
    return collect_result(iter_steps(stage, commands), commands, on_step)


def preview(stage: Stage, commands: Sequence[str]) -> List[FlyerState]:
    """Состояния до остановки (точки превью пути)."""
    return run(stage, commands).states


def outcome_message(result: ExecutionResult) -> str:
    return OUTCOME_MESSAGES[result.outcome]
