"""Core data models for the sliding-tile search kernel.

The search engine treats the puzzle as an external collaborator: it only needs
a canonical textual key, a goal test and the four directional moves. This
module provides that collaborator for square boards of any size (n >= 2),
with ``0`` standing for the blank.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import math

import numpy as np


class InvalidStateError(ValueError):
    """Raised when a puzzle encoding is malformed or incompatible."""
    pass


class Direction(Enum):
    """Direction the blank travels, with its path symbol and offset."""

    UP = ("U", -1, 0)
    RIGHT = ("R", 0, 1)
    DOWN = ("D", 1, 0)
    LEFT = ("L", 0, -1)

    def __init__(self, symbol: str, d_row: int, d_col: int) -> None:
        self.symbol = symbol
        self.d_row = d_row
        self.d_col = d_col

    @property
    def opposite(self) -> 'Direction':
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Successors are always generated in this order
MOVE_ORDER: Tuple[Direction, ...] = (
    Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT
)


@dataclass(frozen=True, eq=False)
class PuzzleState:
    """Immutable n x n sliding-tile configuration."""

    tiles: np.ndarray  # flat, row-major, 0 is the blank
    size: int
    _key: str = field(init=False, repr=False)
    _blank: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the board and cache its canonical key."""
        tiles = np.asarray(self.tiles, dtype=np.int16).reshape(-1)
        if self.size < 2 or tiles.size != self.size * self.size:
            raise InvalidStateError(
                f"Expected {self.size * self.size} tiles for a {self.size}x{self.size} board, "
                f"got {tiles.size}"
            )
        if not np.array_equal(np.sort(tiles), np.arange(tiles.size)):
            raise InvalidStateError(
                f"Tiles must be a permutation of 0..{tiles.size - 1}, got {tiles.tolist()}"
            )
        tiles.setflags(write=False)
        object.__setattr__(self, 'tiles', tiles)
        object.__setattr__(self, '_blank', int(np.flatnonzero(tiles == 0)[0]))

        if self.size <= 3:
            key = "".join(str(int(t)) for t in tiles)
        else:
            key = ",".join(str(int(t)) for t in tiles)
        object.__setattr__(self, '_key', key)

    @classmethod
    def from_sequence(cls, values: Iterable[int]) -> 'PuzzleState':
        tiles = np.fromiter((int(v) for v in values), dtype=np.int16)
        size = math.isqrt(tiles.size)
        if size * size != tiles.size:
            raise InvalidStateError(f"{tiles.size} tiles do not form a square board")
        return cls(tiles=tiles, size=size)

    @classmethod
    def from_string(cls, text: str) -> 'PuzzleState':
        """Parse ``"123456780"`` or ``"1,2,3,...,0"`` style encodings.

        Brackets are ignored, so ``"[1,2,3,4,5,6,7,8,0]"`` is accepted too.
        """
        cleaned = text.strip().strip("[]()")
        if not cleaned:
            raise InvalidStateError("Empty puzzle encoding")
        if any(sep in cleaned for sep in (",", " ", "\t")):
            parts = [p for p in cleaned.replace(",", " ").split() if p]
        else:
            parts = list(cleaned)
        try:
            values = [int(p) for p in parts]
        except ValueError as e:
            raise InvalidStateError(f"Invalid puzzle encoding {text!r}: {e}")
        return cls.from_sequence(values)

    @classmethod
    def coerce(cls, value: Union['PuzzleState', str, Sequence[int]]) -> 'PuzzleState':
        if isinstance(value, PuzzleState):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        return cls.from_sequence(value)

    def to_string(self) -> str:
        """Canonical key; equal keys mean the same state."""
        return self._key

    @property
    def blank_position(self) -> Tuple[int, int]:
        return divmod(self._blank, self.size)

    def can_move(self, direction: Direction) -> bool:
        row, col = self.blank_position
        new_row, new_col = row + direction.d_row, col + direction.d_col
        return 0 <= new_row < self.size and 0 <= new_col < self.size

    def move(self, direction: Direction) -> 'PuzzleState':
        """Return the state reached by sliding the blank one cell.

        Raises:
            InvalidStateError: If the blank would leave the board
        """
        if not self.can_move(direction):
            raise InvalidStateError(f"Cannot move {direction.name} from\n{self}")
        target = self._blank + direction.d_row * self.size + direction.d_col
        tiles = self.tiles.copy()
        tiles[self._blank], tiles[target] = tiles[target], tiles[self._blank]
        return PuzzleState(tiles=tiles, size=self.size)

    def can_move_up(self) -> bool:
        return self.can_move(Direction.UP)

    def can_move_right(self) -> bool:
        return self.can_move(Direction.RIGHT)

    def can_move_down(self) -> bool:
        return self.can_move(Direction.DOWN)

    def can_move_left(self) -> bool:
        return self.can_move(Direction.LEFT)

    def move_up(self) -> 'PuzzleState':
        return self.move(Direction.UP)

    def move_right(self) -> 'PuzzleState':
        return self.move(Direction.RIGHT)

    def move_down(self) -> 'PuzzleState':
        return self.move(Direction.DOWN)

    def move_left(self) -> 'PuzzleState':
        return self.move(Direction.LEFT)

    def goal_match(self, goal: 'PuzzleState') -> bool:
        return self._key == goal.to_string()

    def as_grid(self) -> np.ndarray:
        return self.tiles.reshape(self.size, self.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        width = len(str(self.size * self.size - 1))
        rows = []
        for row in self.as_grid():
            rows.append(" ".join(str(int(t)).rjust(width) if t else " " * width for t in row))
        return "\n".join(rows)


def _parity(state: PuzzleState) -> int:
    """Permutation parity that is invariant under legal moves."""
    values = [int(t) for t in state.tiles if t != 0]
    inversions = 0
    for i in range(len(values)):
        for j in range(i + 1, len(values)):
            if values[i] > values[j]:
                inversions += 1
    if state.size % 2 == 0:
        # Vertical moves flip inversion parity on even widths
        inversions += state.blank_position[0]
    return inversions % 2


def is_solvable(initial: PuzzleState, goal: PuzzleState) -> bool:
    """Check whether ``goal`` is reachable from ``initial``."""
    if initial.size != goal.size:
        return False
    return _parity(initial) == _parity(goal)


def scramble(goal: PuzzleState, moves: int, seed: Optional[int] = None) -> PuzzleState:
    """Random walk of ``moves`` blank moves from ``goal``, never undoing the last move."""
    rng = np.random.default_rng(seed)
    state = goal
    last: Optional[Direction] = None
    for _ in range(moves):
        options: List[Direction] = [d for d in MOVE_ORDER if state.can_move(d)]
        if last is not None and last.opposite in options and len(options) > 1:
            options.remove(last.opposite)
        last = options[int(rng.integers(len(options)))]
        state = state.move(last)
    return state
