# flyerpuzzle/exceptions.py


class FlyerPuzzleError(Exception):
    """Base exception for the flyer puzzle engine."""
    pass


class InvalidStage(FlyerPuzzleError):
    """Raised when a stage descriptor breaks the grid/start/goal/wall rules."""
    pass


class UnknownCommand(FlyerPuzzleError):
    """Raised when a command name is not one of the five known commands."""
    pass


class UnknownDifficulty(FlyerPuzzleError):
    """Raised when a difficulty tier has no generator parameters."""
    pass


class GenerationFailed(FlyerPuzzleError):
    """Raised when the generator runs out of attempts without a solvable stage."""

    def __init__(self, difficulty: str, attempts: int):
        self.difficulty = difficulty
        self.attempts = attempts
        super().__init__(
            f"Could not generate a solvable '{difficulty}' stage in {attempts} attempts"
        )
