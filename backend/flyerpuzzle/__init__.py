"""Flyer Puzzle backend: command-puzzle engine + FastAPI service."""

__version__ = "1.0.0"
