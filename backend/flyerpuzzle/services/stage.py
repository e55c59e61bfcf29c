"""
Flyer Puzzle - Stage model

Неизменяемое описание уровня + состояние птицы (позиция, направление).
Внутри координаты (x=col, y=row); в сериализованном виде пары [row, col].
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple

from ..exceptions import InvalidStage
from .directions import COMMAND_OFFSETS, is_heading
from .movement import Position, in_bounds


class FlyerState(NamedTuple):
    """Единица симуляции и поиска."""
    position: Position
    heading: int


@dataclass(frozen=True)
class Stage:
    """Полное описание уровня: поле, стены, старт/цель, команды."""
    width: int
    height: int
    start: Position
    goal: Position
    start_heading: int = 0
    walls: FrozenSet[Position] = frozenset()
    available_commands: Tuple[str, ...] = ()
    command_slot_count: int = 0
    # Кратчайшее решение (доказательство проходимости): заполняет генератор
    solution: Optional[Tuple[str, ...]] = None
    level: Optional[int] = None
    seed: Optional[int] = None
    difficulty: Optional[str] = None

    def __post_init__(self):
        # Нормализуем типы, чтобы сравнение по значению работало
        object.__setattr__(self, "start", Position(*self.start))
        object.__setattr__(self, "goal", Position(*self.goal))
        object.__setattr__(self, "walls", frozenset(Position(*w) for w in self.walls))
        object.__setattr__(self, "available_commands", tuple(self.available_commands))
        if self.solution is not None:
            object.__setattr__(self, "solution", tuple(self.solution))
        self._validate()

    def _validate(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidStage(f"Grid size must be positive, got {self.width}x{self.height}")

        if not in_bounds(self.start, self.width, self.height):
            raise InvalidStage(f"Start {tuple(self.start)} is outside the grid")
        if not in_bounds(self.goal, self.width, self.height):
            raise InvalidStage(f"Goal {tuple(self.goal)} is outside the grid")
        if self.start == self.goal:
            raise InvalidStage("Start and goal must be different cells")

        for wall in self.walls:
            if not in_bounds(wall, self.width, self.height):
                raise InvalidStage(f"Wall {tuple(wall)} is outside the grid")
        if self.start in self.walls:
            raise InvalidStage("Start cell is a wall")
        if self.goal in self.walls:
            raise InvalidStage("Goal cell is a wall")

        if not is_heading(self.start_heading):
            raise InvalidStage(f"Start heading must be a multiple of 45 in [0, 360), got {self.start_heading!r}")

        for command in self.available_commands:
            if command not in COMMAND_OFFSETS:
                raise InvalidStage(f"Unknown command in pool: {command!r}")
        if self.solution is not None:
            for command in self.solution:
                if command not in COMMAND_OFFSETS:
                    raise InvalidStage(f"Unknown command in solution: {command!r}")

        if self.command_slot_count < 0:
            raise InvalidStage("command_slot_count must not be negative")

    def is_blocked(self, position: Position) -> bool:
        """Клетка за пределами поля или стена."""
        return not in_bounds(position, self.width, self.height) or position in self.walls

    def initial_state(self) -> FlyerState:
        return FlyerState(self.start, self.start_heading)


# ============================================
# DESCRIPTOR (de)serialization
# ============================================

def _to_row_col(position: Position) -> List[int]:
    return [position.y, position.x]


def _require_int(value: Any, name: str) -> int:
    # 45.9 или "1" не приводим: в файле уровня это ошибка
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidStage(f"{name} must be an integer, got {value!r}")
    return value


def _parse_row_col(value: Any, name: str) -> Position:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise InvalidStage(f"{name} must be a [row, col] pair, got {value!r}")
    row = _require_int(value[0], f"{name} row")
    col = _require_int(value[1], f"{name} col")
    return Position(col, row)


def stage_to_descriptor(stage: Stage) -> Dict[str, Any]:
    """Stage → сериализуемый dict (gridSize, start, goal, walls, ...)."""
    return {
        "gridSize": [stage.width, stage.height],
        "start": _to_row_col(stage.start),
        "startHeading": stage.start_heading,
        "goal": _to_row_col(stage.goal),
        "walls": sorted(_to_row_col(w) for w in stage.walls),
        "availableCommands": list(stage.available_commands),
        "commandSlotCount": stage.command_slot_count,
    }


def stage_from_descriptor(data: Dict[str, Any], **meta) -> Stage:
    """Обратное преобразование; битые данные → InvalidStage."""
    if not isinstance(data, dict):
        raise InvalidStage("Stage descriptor must be an object")

    missing = [k for k in ("gridSize", "start", "goal") if k not in data]
    if missing:
        raise InvalidStage(f"Stage descriptor is missing: {', '.join(missing)}")

    grid_size = data["gridSize"]
    if not isinstance(grid_size, (list, tuple)) or len(grid_size) != 2:
        raise InvalidStage(f"gridSize must be [width, height], got {grid_size!r}")
    width = _require_int(grid_size[0], "gridSize width")
    height = _require_int(grid_size[1], "gridSize height")
    start_heading = _require_int(data.get("startHeading", 0), "startHeading")
    slot_count = _require_int(data.get("commandSlotCount", 0), "commandSlotCount")

    raw_walls = data.get("walls", [])
    if not isinstance(raw_walls, list):
        raise InvalidStage("walls must be a list of [row, col] pairs")

    commands = data.get("availableCommands", [])
    if not isinstance(commands, list):
        raise InvalidStage("availableCommands must be a list")

    return Stage(
        width=width,
        height=height,
        start=_parse_row_col(data["start"], "start"),
        goal=_parse_row_col(data["goal"], "goal"),
        start_heading=start_heading,
        walls=frozenset(_parse_row_col(w, "wall") for w in raw_walls),
        available_commands=tuple(commands),
        command_slot_count=slot_count,
        **meta,
    )
