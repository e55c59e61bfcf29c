from .directions import apply_command, COMMANDS, HEADINGS
from .movement import Position, step
from .stage import FlyerState, Stage, stage_from_descriptor, stage_to_descriptor
from .runner import ExecutionResult, run, preview, iter_steps
from .pacing import play
from .solver import solve
from .generator import SeededRandom, generate, generate_level

__all__ = [
    "apply_command", "COMMANDS", "HEADINGS",
    "Position", "step",
    "FlyerState", "Stage", "stage_from_descriptor", "stage_to_descriptor",
    "ExecutionResult", "run", "preview", "iter_steps",
    "play",
    "solve",
    "SeededRandom", "generate", "generate_level",
]
