"""Uniform Cost and A* search with a strict expanded list.

Both variants share one driver loop: pop the best node, drop it if its state
was already expanded, stop on the goal, otherwise expand it in the fixed order
up, right, down, left and route every successor through the duplicate
resolver. They differ only in frontier ordering, in the duplicate-dominance
rule and in whether successors carry a heuristic estimate.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from tile_search.core.data_models import MOVE_ORDER, InvalidStateError, PuzzleState
from tile_search.search.comparators import (
    DominanceFunction, PriorityFunction, astar_dominates, astar_priority,
    uc_dominates, uc_priority
)
from tile_search.search.duplicates import Disposition, DuplicateResolver
from tile_search.search.expanded import ExpandedSet
from tile_search.search.frontier import Frontier
from tile_search.search.heuristics import HeuristicFunction, get_heuristic
from tile_search.search.models import (
    SearchConfig, SearchNode, SearchResult, SearchStatistics, SearchStatus
)

logger = logging.getLogger(__name__)

StateLike = Union[PuzzleState, str, Sequence[int]]


@dataclass(frozen=True)
class Algorithm:
    """Ordering and dominance rules of one search variant."""
    name: str
    description: str
    priority: PriorityFunction
    dominates: DominanceFunction
    informed: bool


ALGORITHMS = {
    'uc': Algorithm('uc', "UC with strict expanded list", uc_priority, uc_dominates, False),
    'astar': Algorithm('astar', "A* with strict expanded list", astar_priority, astar_dominates, True),
}


class GraphSearcher:
    """Runs UC or A* over sliding-tile puzzles."""

    def __init__(self,
                 algorithm: Optional[str] = None,
                 heuristic: Union[str, HeuristicFunction, None] = None,
                 config: Optional[SearchConfig] = None):
        """Initialize the searcher.

        Args:
            algorithm: 'uc' or 'astar'; defaults to ``config.algorithm``
            heuristic: Heuristic name or callable for A*; defaults to ``config.heuristic``
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        name = (algorithm or self.config.algorithm).lower()
        if name not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm '{name}'. Available: {', '.join(ALGORITHMS)}")
        self.algorithm = ALGORITHMS[name]

        self.heuristic: Optional[HeuristicFunction] = None
        if self.algorithm.informed:
            chosen = heuristic if heuristic is not None else self.config.heuristic
            self.heuristic = get_heuristic(chosen) if isinstance(chosen, str) else chosen

        # State of the most recent run, kept for inspection
        self.statistics = SearchStatistics()
        self.expanded = ExpandedSet()
        self.status = SearchStatus.RUNNING

        logger.info(f"{self.algorithm.description} initialized "
                    f"(heuristic={self.heuristic_name}, scan_workers={self.config.scan_workers})")

    @property
    def heuristic_name(self) -> Optional[str]:
        if self.heuristic is None:
            return None
        return getattr(self.heuristic, 'name', getattr(self.heuristic, '__name__', repr(self.heuristic)))

    def _make_node(self, node: SearchNode, goal: PuzzleState) -> SearchNode:
        if self.heuristic is not None:
            node.update_h_cost(self.heuristic, goal)
            node.update_f_cost()
        return node

    def search(self, initial: StateLike, goal: StateLike) -> SearchResult:
        """Search for a shortest move sequence from ``initial`` to ``goal``.

        Args:
            initial: Initial state (``PuzzleState``, canonical string or tile sequence)
            goal: Goal state in the same forms

        Returns:
            SearchResult; an exhausted search has an empty path and length 0

        Raises:
            InvalidStateError: If either state is malformed or their sizes differ
        """
        initial_state = PuzzleState.coerce(initial)
        goal_state = PuzzleState.coerce(goal)
        if initial_state.size != goal_state.size:
            raise InvalidStateError(
                f"Initial state is {initial_state.size}x{initial_state.size} "
                f"but goal is {goal_state.size}x{goal_state.size}"
            )

        start_time = time.perf_counter()
        statistics = SearchStatistics()
        frontier = Frontier(self.algorithm.priority)
        expanded = ExpandedSet()
        self.statistics = statistics
        self.expanded = expanded
        self.status = SearchStatus.RUNNING
        path = ""

        logger.info(f"Starting {self.algorithm.description}: "
                    f"{initial_state.to_string()} -> {goal_state.to_string()}")

        frontier.insert(self._make_node(SearchNode(state=initial_state), goal_state))

        with DuplicateResolver(frontier, expanded, self.algorithm.dominates,
                               workers=self.config.scan_workers,
                               min_parallel_size=self.config.min_parallel_size) as resolver:
            while self.status is SearchStatus.RUNNING:
                statistics.observe_frontier(len(frontier))
                if not frontier:
                    self.status = SearchStatus.EXHAUSTED
                    break

                current = frontier.extract_min()

                if current.key in expanded:
                    statistics.attempted_reexpansions += 1
                    continue

                if current.state.goal_match(goal_state):
                    self.status = SearchStatus.GOAL_FOUND
                    path = current.path
                    frontier.drain()
                    break

                expanded.insert(current.key)
                statistics.state_expansions += 1
                if self.config.log_interval and statistics.state_expansions % self.config.log_interval == 0:
                    logger.info(f"{statistics.state_expansions} expansions, frontier={len(frontier)}, "
                                f"g={current.g_cost}, f={current.f_cost}")

                for direction in MOVE_ORDER:
                    if not current.state.can_move(direction):
                        continue
                    successor = self._make_node(current.expand(direction), goal_state)
                    statistics.successors_generated += 1
                    if resolver.resolve(successor) is Disposition.ALREADY_EXPANDED:
                        statistics.local_loops_avoided += 1

        statistics.deletions_from_middle_of_heap = frontier.mid_heap_deletions
        statistics.path_length = len(path)
        statistics.elapsed_time = time.perf_counter() - start_time

        if self.status is SearchStatus.GOAL_FOUND:
            logger.info(f"Goal found: path length {len(path)}, "
                        f"{statistics.state_expansions} expansions in {statistics.elapsed_time:.3f}s")
        else:
            logger.info(f"Frontier exhausted without reaching the goal after "
                        f"{statistics.state_expansions} expansions")

        return SearchResult(
            status=self.status,
            path=path,
            path_length=len(path),
            algorithm=self.algorithm.name,
            statistics=statistics,
            heuristic=self.heuristic_name,
        )


def create_searcher(algorithm: Optional[str] = None,
                    heuristic: Union[str, HeuristicFunction, None] = None,
                    scan_workers: int = 1,
                    min_parallel_size: int = 256) -> GraphSearcher:
    """Factory function to create a searcher with custom configuration.

    Args:
        algorithm: 'uc' or 'astar' (default 'astar')
        heuristic: Heuristic name or callable for A* (default 'manhattan')
        scan_workers: Worker threads for the frontier duplicate scan
        min_parallel_size: Smallest frontier scanned in parallel

    Returns:
        Configured GraphSearcher instance
    """
    config = SearchConfig(
        algorithm=algorithm or SearchConfig.algorithm,
        scan_workers=scan_workers,
        min_parallel_size=min_parallel_size,
    )
    return GraphSearcher(config.algorithm, heuristic, config)


def uniform_cost_search(initial: StateLike, goal: StateLike,
                        config: Optional[SearchConfig] = None) -> SearchResult:
    """Uniform Cost search with a strict expanded list."""
    return GraphSearcher('uc', config=config).search(initial, goal)


def astar_search(initial: StateLike, goal: StateLike,
                 heuristic: Union[str, HeuristicFunction, Callable] = 'manhattan',
                 config: Optional[SearchConfig] = None) -> SearchResult:
    """A* with a strict expanded list."""
    return GraphSearcher('astar', heuristic, config).search(initial, goal)
