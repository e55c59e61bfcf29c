"""
Flyer Puzzle - Paced execution

Драйвер для анимации: тот же iter_steps, что и у run(), но между шагами
управление отдаётся на step_delay секунд. Отмена делается отменой задачи
вызывающим кодом, движок фоновых задач не держит.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Optional, Sequence, Union

from ..config import settings
from .runner import ExecutionResult, ResultRecorder, StepOutcome, iter_steps
from .stage import Stage


PacedCallback = Callable[[int, str, StepOutcome], Union[None, Awaitable[None]]]


async def play(
    stage: Stage,
    commands: Sequence[str],
    on_step: Optional[PacedCallback] = None,
    step_delay: Optional[float] = None,
) -> ExecutionResult:
    """
    Выполняет команды с паузой после каждого шага.

    on_step может быть обычной функцией или корутиной. Результат всегда
    совпадает с run(stage, commands).
    """
    if step_delay is None:
        step_delay = settings.step_delay_seconds

    commands = list(commands)
    recorder = ResultRecorder()

    for index, outcome in iter_steps(stage, commands):
        if on_step is not None:
            maybe_awaitable = on_step(index, commands[index], outcome)
            if inspect.isawaitable(maybe_awaitable):
                await maybe_awaitable

        result = recorder.record(index, outcome)
        if result is not None:
            return result

        await asyncio.sleep(step_delay)

    return recorder.exhausted()
