"""Pluggable heuristics for A* search over sliding-tile puzzles.

A heuristic is any callable ``(state, goal) -> int`` returning a non-negative
estimate of the remaining number of moves. The search kernel does not check
admissibility; an inadmissible heuristic simply yields a suboptimal path.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

import numpy as np

from tile_search.core.data_models import PuzzleState

logger = logging.getLogger(__name__)

HeuristicFunction = Callable[[PuzzleState, PuzzleState], int]


class UnknownHeuristicError(KeyError):
    """Raised when a heuristic name is not registered."""
    pass


class BaseHeuristic(ABC):
    """Abstract base class for heuristics."""

    def __init__(self, name: str):
        """Initialize heuristic.

        Args:
            name: Name of the heuristic
        """
        self.name = name
        self.computation_count = 0
        self.total_computation_time = 0.0

    @abstractmethod
    def compute(self, state: PuzzleState, goal: PuzzleState) -> int:
        """Compute heuristic value.

        Args:
            state: Current puzzle state
            goal: Goal puzzle state

        Returns:
            Non-negative estimate of the moves left
        """
        pass

    def __call__(self, state: PuzzleState, goal: PuzzleState) -> int:
        """Compute heuristic with timing and statistics."""
        start_time = time.perf_counter()
        value = self.compute(state, goal)
        self.computation_count += 1
        self.total_computation_time += time.perf_counter() - start_time
        return value

    def get_stats(self) -> Dict[str, Any]:
        """Get computation statistics."""
        avg_time = (self.total_computation_time / self.computation_count
                    if self.computation_count > 0 else 0.0)

        return {
            'name': self.name,
            'computation_count': self.computation_count,
            'total_time': self.total_computation_time,
            'average_time': avg_time,
            'average_time_us': avg_time * 1000000
        }


class ZeroHeuristic(BaseHeuristic):
    """h = 0; A* with this heuristic orders the frontier exactly like UC."""

    def __init__(self):
        super().__init__("zero")

    def compute(self, state: PuzzleState, goal: PuzzleState) -> int:
        return 0


class MisplacedTilesHeuristic(BaseHeuristic):
    """Number of non-blank tiles that are not on their goal cell."""

    def __init__(self):
        super().__init__("misplaced")

    def compute(self, state: PuzzleState, goal: PuzzleState) -> int:
        mismatched = (state.tiles != goal.tiles) & (state.tiles != 0)
        return int(np.count_nonzero(mismatched))


class ManhattanDistanceHeuristic(BaseHeuristic):
    """Sum over non-blank tiles of the grid distance to their goal cell."""

    def __init__(self):
        super().__init__("manhattan")
        self._goal_key = None
        self._goal_positions = None

    def _positions_for(self, goal: PuzzleState) -> np.ndarray:
        # Goal positions are indexed by tile value; cached per goal
        if self._goal_key != goal.to_string():
            positions = np.empty(goal.tiles.size, dtype=np.int64)
            positions[goal.tiles] = np.arange(goal.tiles.size)
            self._goal_positions = positions
            self._goal_key = goal.to_string()
        return self._goal_positions

    def compute(self, state: PuzzleState, goal: PuzzleState) -> int:
        goal_positions = self._positions_for(goal)
        current = np.arange(state.tiles.size)
        target = goal_positions[state.tiles]
        mask = state.tiles != 0

        size = state.size
        rows = np.abs(current[mask] // size - target[mask] // size)
        cols = np.abs(current[mask] % size - target[mask] % size)
        return int(rows.sum() + cols.sum())


def zero_heuristic(state: PuzzleState, goal: PuzzleState) -> int:
    return 0


def misplaced_tiles(state: PuzzleState, goal: PuzzleState) -> int:
    return MisplacedTilesHeuristic().compute(state, goal)


def manhattan_distance(state: PuzzleState, goal: PuzzleState) -> int:
    """Manhattan distance heuristic.

    Sum of the distances each tile is from its goal position.
    """
    return ManhattanDistanceHeuristic().compute(state, goal)


HEURISTICS: Dict[str, Callable[[], BaseHeuristic]] = {
    'zero': ZeroHeuristic,
    'misplaced': MisplacedTilesHeuristic,
    'manhattan': ManhattanDistanceHeuristic,
}


def get_heuristic(name: str) -> BaseHeuristic:
    """Factory function to create a heuristic by name.

    Args:
        name: Registered heuristic name ('zero', 'misplaced' or 'manhattan')

    Returns:
        Fresh heuristic instance with its own statistics

    Raises:
        UnknownHeuristicError: If the name is not registered
    """
    try:
        factory = HEURISTICS[name.lower()]
    except KeyError:
        raise UnknownHeuristicError(
            f"Unknown heuristic '{name}'. Available: {', '.join(sorted(HEURISTICS))}"
        )
    logger.debug(f"Created heuristic '{name}'")
    return factory()
