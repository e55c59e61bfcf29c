"""
Flyer Puzzle - Pydantic Schemas

Все схемы валидации в одном файле.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


Command = Literal["forward", "left45", "left90", "right45", "right90"]
Outcome = Literal["success", "wall_collision", "exhausted"]

MAX_COMMANDS_PER_REQUEST = 64


# ============================================
# STAGE
# ============================================

class StageDescriptor(BaseModel):
    """
    Описание уровня в формате уровней/генератора.
    Все пары координат: [row, col].
    """
    model_config = ConfigDict(populate_by_name=True)

    grid_size: List[int] = Field(alias="gridSize", min_length=2, max_length=2)
    start: List[int] = Field(min_length=2, max_length=2)
    start_heading: int = Field(0, alias="startHeading")
    goal: List[int] = Field(min_length=2, max_length=2)
    walls: List[List[int]] = []
    available_commands: List[Command] = Field(default_factory=list, alias="availableCommands")
    command_slot_count: int = Field(0, alias="commandSlotCount")

    def to_descriptor(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class FlyerStateSchema(BaseModel):
    """Состояние птицы: клетка + направление."""
    row: int
    col: int
    heading: int
    arrow: str  # '↑', '↗', ... для индикатора направления


class LevelMeta(BaseModel):
    """Метаданные уровня."""
    difficulty: Optional[str] = None
    source: Literal["file", "generated"]
    solution_length: Optional[int] = None


class LevelResponse(BaseModel):
    """Ответ с данными уровня (без решения)."""
    level: Optional[int] = None
    seed: Optional[int] = None
    stage: StageDescriptor
    meta: LevelMeta


# ============================================
# GAME
# ============================================

class GenerateRequest(BaseModel):
    """Запрос генерации уровня."""
    difficulty: str = "easy"
    seed: Optional[int] = None


class RunRequest(BaseModel):
    """Запрос превью/выполнения команд."""
    stage: StageDescriptor
    commands: List[Command] = Field(max_length=MAX_COMMANDS_PER_REQUEST)


class PreviewResponse(BaseModel):
    """Точки превью пути."""
    states: List[FlyerStateSchema]


class ExecuteResponse(BaseModel):
    """Результат выполнения."""
    outcome: Outcome
    index: Optional[int] = None
    message: str
    states: List[FlyerStateSchema]


class CheckRequest(BaseModel):
    """Проверка расстановки игрока на серверной копии уровня."""
    level: int
    seed: Optional[int] = None
    commands: List[Command] = Field(max_length=MAX_COMMANDS_PER_REQUEST)


class SolveRequest(BaseModel):
    """Запрос решения (подсказка)."""
    stage: StageDescriptor
    max_depth: int = Field(6, ge=0, le=10)


class SolveResponse(BaseModel):
    """Кратчайшее решение или solvable=False."""
    solvable: bool
    commands: List[Command] = []
    length: Optional[int] = None
