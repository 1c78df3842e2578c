"""Puzzle state model consumed by the search kernel."""

from .data_models import (
    Direction, InvalidStateError, MOVE_ORDER, PuzzleState, is_solvable, scramble
)

__all__ = [
    'Direction',
    'InvalidStateError',
    'MOVE_ORDER',
    'PuzzleState',
    'is_solvable',
    'scramble'
]
