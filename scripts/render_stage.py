#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json

from flyerpuzzle.services.directions import HEADING_ARROWS
from flyerpuzzle.services.generator import SeededRandom, generate, validate_stage
from flyerpuzzle.services.level_loader import get_stage
from flyerpuzzle.services.movement import Position
from flyerpuzzle.services.solver import solve
from flyerpuzzle.services.stage import Stage, stage_to_descriptor


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print a stage as an ASCII board together with its shortest solution."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--level",
        type=int,
        default=1,
        help="Level number (hand-made file if present, generated otherwise).",
    )
    source.add_argument(
        "--seed",
        type=int,
        help="Generate a fresh stage from this seed instead of loading a level.",
    )
    parser.add_argument(
        "--difficulty",
        default="easy",
        help="Difficulty tier used with --seed.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Also print the stage descriptor as JSON.",
    )
    return parser.parse_args()


def render_board(stage: Stage) -> str:
    rows: list[str] = []
    for y in range(stage.height):
        cells: list[str] = []
        for x in range(stage.width):
            pos = Position(x, y)
            if pos == stage.start:
                cells.append(HEADING_ARROWS[stage.start_heading])
            elif pos == stage.goal:
                cells.append("G")
            elif pos in stage.walls:
                cells.append("#")
            else:
                cells.append(".")
        rows.append(" ".join(cells))
    return "\n".join(rows)


def main() -> None:
    args = parse_args()
    if args.seed is not None:
        stage = generate(args.difficulty, SeededRandom(args.seed))
        title = f"seed {args.seed} ({args.difficulty})"
    else:
        stage = get_stage(args.level)
        title = f"level {args.level}"

    solution = stage.solution if stage.solution is not None else solve(stage)
    report = validate_stage(stage)

    print(f"Stage: {title}")
    print(render_board(stage))
    print(f"Commands: {', '.join(stage.available_commands)}")
    print(f"Slots: {stage.command_slot_count}")
    print(f"Solution: {', '.join(solution) if solution else 'none'}")
    print(f"Valid: {report['valid']}")
    for error in report["errors"]:
        print(f"  - {error}")

    if args.json:
        print(json.dumps(stage_to_descriptor(stage), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
