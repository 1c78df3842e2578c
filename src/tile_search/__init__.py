"""Uniform Cost and A* search with a strict expanded list for sliding-tile puzzles."""

__version__ = "0.1.0"

from tile_search.core.data_models import PuzzleState, is_solvable
from tile_search.search.engine import GraphSearcher, astar_search, create_searcher, uniform_cost_search

__all__ = [
    '__version__',
    'PuzzleState',
    'is_solvable',
    'GraphSearcher',
    'astar_search',
    'create_searcher',
    'uniform_cost_search'
]
