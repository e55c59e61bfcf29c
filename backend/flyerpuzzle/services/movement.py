"""
Flyer Puzzle - Movement Simulator

Один шаг вперёд по направлению. Границы и стены проверяет вызывающий код.
"""

import math
from typing import NamedTuple


class Position(NamedTuple):
    """Клетка поля: x = колонка, y = строка (0 сверху)."""
    x: int
    y: int


def step(position: Position, heading: int) -> Position:
    """
    Соседняя клетка в направлении heading.

    sin/cos кратных 45° дают 0, ±1 или ±0.707..., round() сводит их
    к одному из 8 соседей. Может вернуть клетку за пределами поля.
    """
    rad = heading * math.pi / 180
    return Position(
        position[0] + round(math.sin(rad)),
        position[1] - round(math.cos(rad)),
    )


def in_bounds(position: Position, width: int, height: int) -> bool:
    """Проверяет что клетка в границах поля."""
    return 0 <= position[0] < width and 0 <= position[1] < height


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
