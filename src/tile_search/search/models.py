"""Search nodes, statistics and results shared by the search components."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from tile_search.core.data_models import Direction, PuzzleState


@dataclass
class SearchNode:
    """Node in the search tree: a puzzle state plus its costs and move path."""
    state: PuzzleState
    g_cost: int = 0  # moves made from the initial state
    path: str = ""  # move symbols from the initial state, e.g. "URD"
    h_cost: int = 0  # set once for A*, right after construction
    f_cost: int = 0
    key: str = field(init=False, repr=False)  # canonical state key

    def __post_init__(self):
        """Cache the canonical key used for duplicate detection."""
        self.key = self.state.to_string()
        self.f_cost = self.g_cost + self.h_cost

    @property
    def path_length(self) -> int:
        return len(self.path)

    def expand(self, direction: Direction) -> 'SearchNode':
        """Create the successor reached by moving the blank in ``direction``."""
        return SearchNode(
            state=self.state.move(direction),
            g_cost=self.g_cost + 1,
            path=self.path + direction.symbol,
        )

    def update_h_cost(self, heuristic, goal: PuzzleState) -> None:
        self.h_cost = int(heuristic(self.state, goal))

    def update_f_cost(self) -> None:
        self.f_cost = self.g_cost + self.h_cost


class SearchStatus(Enum):
    """Search driver states."""
    RUNNING = "running"
    GOAL_FOUND = "goal_found"
    EXHAUSTED = "exhausted"


@dataclass
class SearchStatistics:
    """Counters accumulated by one search run."""
    state_expansions: int = 0
    max_frontier_size: int = 0
    deletions_from_middle_of_heap: int = 0
    local_loops_avoided: int = 0
    attempted_reexpansions: int = 0
    successors_generated: int = 0
    elapsed_time: float = 0.0  # seconds
    path_length: int = 0

    def observe_frontier(self, size: int) -> None:
        if size > self.max_frontier_size:
            self.max_frontier_size = size

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return asdict(self)


@dataclass
class SearchResult:
    """Outcome of a search run."""
    status: SearchStatus
    path: str = ""
    path_length: int = 0
    algorithm: str = ""
    statistics: SearchStatistics = field(default_factory=SearchStatistics)
    heuristic: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is SearchStatus.GOAL_FOUND

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': self.algorithm,
            'heuristic': self.heuristic,
            'status': self.status.value,
            'success': self.success,
            'path': self.path,
            'path_length': self.path_length,
            'statistics': self.statistics.to_dict(),
        }


@dataclass
class SearchConfig:
    """Configuration for a search run."""
    algorithm: str = "astar"  # "uc" or "astar"
    heuristic: str = "manhattan"  # used by A* only
    scan_workers: int = 1  # >1 enables the parallel frontier scan
    min_parallel_size: int = 256  # frontiers smaller than this are scanned inline
    log_interval: int = 10000  # expansions between progress log lines; 0 disables

    @classmethod
    def from_config(cls, cfg) -> 'SearchConfig':
        """Build from a loaded configuration (``DictConfig`` or plain dict).

        Missing keys fall back to the dataclass defaults.
        """
        search_cfg = cfg.get('search', {}) or {}
        scan_cfg = search_cfg.get('duplicate_scan', {}) or {}
        defaults = cls()
        return cls(
            algorithm=str(search_cfg.get('algorithm', defaults.algorithm)),
            heuristic=str(search_cfg.get('heuristic', defaults.heuristic)),
            scan_workers=int(scan_cfg.get('workers', defaults.scan_workers)),
            min_parallel_size=int(scan_cfg.get('min_parallel_size', defaults.min_parallel_size)),
            log_interval=int(search_cfg.get('log_interval', defaults.log_interval)),
        )
