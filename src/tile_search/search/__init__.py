"""Search algorithms for sliding-tile puzzles.

This module implements Uniform Cost search and A* with a strict expanded list,
a heap frontier supporting interior removal, and duplicate resolution against
queued nodes.
"""

from .models import SearchNode, SearchResult, SearchStatistics, SearchStatus, SearchConfig
from .frontier import Frontier, EmptyFrontierError
from .expanded import ExpandedSet
from .duplicates import DuplicateResolver, Disposition
from .heuristics import (
    BaseHeuristic, ManhattanDistanceHeuristic, MisplacedTilesHeuristic, ZeroHeuristic,
    UnknownHeuristicError, get_heuristic, manhattan_distance, misplaced_tiles, zero_heuristic
)
from .engine import GraphSearcher, create_searcher, uniform_cost_search, astar_search

__all__ = [
    'SearchNode',
    'SearchResult',
    'SearchStatistics',
    'SearchStatus',
    'SearchConfig',
    'Frontier',
    'EmptyFrontierError',
    'ExpandedSet',
    'DuplicateResolver',
    'Disposition',
    'BaseHeuristic',
    'ManhattanDistanceHeuristic',
    'MisplacedTilesHeuristic',
    'ZeroHeuristic',
    'UnknownHeuristicError',
    'get_heuristic',
    'manhattan_distance',
    'misplaced_tiles',
    'zero_heuristic',
    'GraphSearcher',
    'create_searcher',
    'uniform_cost_search',
    'astar_search'
]
