"""
Flyer Puzzle - Direction Model

8 направлений (кратные 45°, по часовой от "вверх") и 5 команд.
"""

from typing import Dict, Tuple

from ..exceptions import UnknownCommand


# ============================================
# CONSTANTS
# ============================================

HEADINGS: Tuple[int, ...] = (0, 45, 90, 135, 180, 225, 270, 315)

CARDINAL_HEADINGS: Tuple[int, ...] = (0, 90, 180, 270)

FORWARD = "forward"
LEFT45 = "left45"
LEFT90 = "left90"
RIGHT45 = "right45"
RIGHT90 = "right90"

COMMANDS: Tuple[str, ...] = (FORWARD, RIGHT45, RIGHT90, LEFT45, LEFT90)

COMMAND_OFFSETS: Dict[str, int] = {
    FORWARD: 0,
    LEFT45: -45,
    LEFT90: -90,
    RIGHT45: 45,
    RIGHT90: 90,
}

HEADING_ARROWS: Dict[int, str] = {
    0: "↑",
    45: "↗",
    90: "→",
    135: "↘",
    180: "↓",
    225: "↙",
    270: "←",
    315: "↖",
}


# ============================================
# HELPERS
# ============================================

def is_heading(value) -> bool:
    """Проверяет что значение входит в 8 канонических направлений."""
    return isinstance(value, int) and not isinstance(value, bool) and value in HEADINGS


def ensure_command(command: str) -> str:
    """Возвращает команду или бросает UnknownCommand."""
    if command not in COMMAND_OFFSETS:
        raise UnknownCommand(f"Unknown command: {command!r}")
    return command


def apply_command(heading: int, command: str) -> int:
    """
    Новое направление после команды.

    forward не меняет направление, left/right поворачивают на 45° или 90°.
    Результат всегда нормализован в [0, 360).
    """
    offset = COMMAND_OFFSETS.get(command)
    if offset is None:
        raise UnknownCommand(f"Unknown command: {command!r}")
    return (heading + offset + 360) % 360
