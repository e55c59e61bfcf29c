"""
Flyer Puzzle - Game API

UI отдаёт порядок команд и описание уровня, движок отвечает
результатом выполнения. Ни одно состояние между запросами не хранится.
"""

import logging
import time
from collections import Counter
from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request

from ..config import settings
from ..middleware.security import limiter
from ..schemas import (
    LevelResponse, LevelMeta, StageDescriptor, FlyerStateSchema,
    GenerateRequest, RunRequest, PreviewResponse, ExecuteResponse,
    CheckRequest, SolveRequest, SolveResponse,
)
from ..services.directions import HEADING_ARROWS
from ..services.generator import generate, generate_level, SeededRandom
from ..services.level_loader import load_level_from_file
from ..services.runner import ExecutionResult, outcome_message, preview, run
from ..services.solver import solve
from ..services.stage import FlyerState, Stage, stage_from_descriptor, stage_to_descriptor


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/game", tags=["game"])


# ============================================
# LEVEL CACHE (in-memory LRU)
# ============================================

@lru_cache(maxsize=256)
def _cached_level(level_num: int, seed: Optional[int] = None) -> Stage:
    """Файлы уровней не меняются в рантайме, генерация детерминирована по seed."""
    stage = load_level_from_file(level_num)
    if stage is not None:
        return stage
    return generate_level(level_num, seed=seed)


def get_cached_level(level_num: int, seed: Optional[int] = None) -> Stage:
    return _cached_level(level_num, seed)


# ============================================
# SERIALIZATION
# ============================================

def _serialize_state(state: FlyerState) -> FlyerStateSchema:
    return FlyerStateSchema(
        row=state.position.y,
        col=state.position.x,
        heading=state.heading,
        arrow=HEADING_ARROWS[state.heading],
    )


def _serialize_level_response(stage: Stage) -> LevelResponse:
    """Stage → LevelResponse. Решение не отдаём: только его длину."""
    return LevelResponse(
        level=stage.level,
        seed=stage.seed,
        stage=StageDescriptor(**stage_to_descriptor(stage)),
        meta=LevelMeta(
            difficulty=stage.difficulty,
            source="generated" if stage.solution is not None else "file",
            solution_length=len(stage.solution) if stage.solution is not None else None,
        ),
    )


def _serialize_execution(result: ExecutionResult) -> ExecuteResponse:
    return ExecuteResponse(
        outcome=result.outcome,
        index=result.index,
        message=outcome_message(result),
        states=[_serialize_state(s) for s in result.states],
    )


def _stage_from_request(descriptor: StageDescriptor) -> Stage:
    # InvalidStage → 422 через обработчик в main.py
    return stage_from_descriptor(descriptor.to_descriptor())


# ============================================
# ENDPOINTS
# ============================================

@router.get("/level/{level_num}", response_model=LevelResponse)
async def get_level(level_num: int, seed: Optional[int] = None):
    if level_num < 1:
        raise HTTPException(status_code=400, detail="Invalid level number")

    stage = get_cached_level(level_num, seed)
    return _serialize_level_response(stage)


@router.post("/generate", response_model=LevelResponse)
@limiter.limit(f"{settings.RATE_LIMIT_GAME}/minute")
async def generate_stage(request: Request, body: GenerateRequest):
    seed = body.seed if body.seed is not None else time.time_ns() & 0x7FFFFFFF

    started = time.monotonic()
    stage = generate(body.difficulty, SeededRandom(seed))
    elapsed_ms = (time.monotonic() - started) * 1000
    logger.info(f"[Game] generate difficulty={stage.difficulty} seed={seed} generate_ms={elapsed_ms:.1f}")

    response = _serialize_level_response(stage)
    response.seed = seed
    return response


@router.post("/preview", response_model=PreviewResponse)
async def preview_path(body: RunRequest):
    stage = _stage_from_request(body.stage)
    states = preview(stage, body.commands)
    return PreviewResponse(states=[_serialize_state(s) for s in states])


@router.post("/execute", response_model=ExecuteResponse)
async def execute_commands(body: RunRequest):
    stage = _stage_from_request(body.stage)
    result = run(stage, body.commands)
    return _serialize_execution(result)


@router.post("/check", response_model=ExecuteResponse)
async def check_arrangement(body: CheckRequest):
    """
    Проверяет расстановку игрока на серверной копии уровня.
    Принимается любая последовательность из плиток пула, достигающая цели
    в пределах слотов.
    """
    if body.level < 1:
        raise HTTPException(status_code=400, detail="Invalid level number")

    stage = get_cached_level(body.level, body.seed)
    if len(body.commands) > stage.command_slot_count:
        raise HTTPException(
            status_code=400,
            detail=f"Expected at most {stage.command_slot_count} commands, got {len(body.commands)}",
        )

    # Каждая плитка из пула используется не больше одного раза
    missing = Counter(body.commands) - Counter(stage.available_commands)
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Commands not available in the pool: {sorted(missing.elements())}",
        )

    result = run(stage, body.commands)
    logger.info(
        f"[Game] check level={body.level} commands={len(body.commands)} "
        f"outcome={result.outcome} index={result.index}"
    )
    return _serialize_execution(result)


@router.post("/solve", response_model=SolveResponse)
@limiter.limit(f"{settings.RATE_LIMIT_GAME}/minute")
async def solve_stage(request: Request, body: SolveRequest):
    stage = _stage_from_request(body.stage)
    commands: Optional[List[str]] = solve(stage, body.max_depth)
    if commands is None:
        return SolveResponse(solvable=False)
    return SolveResponse(solvable=True, commands=commands, length=len(commands))
