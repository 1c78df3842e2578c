"""Tests for duplicate resolution against queued nodes."""

import itertools

import pytest

from tile_search.core.data_models import Direction, PuzzleState
from tile_search.search.comparators import (
    astar_dominates, astar_priority, uc_dominates, uc_priority
)
from tile_search.search.duplicates import Disposition, DuplicateResolver
from tile_search.search.expanded import ExpandedSet
from tile_search.search.frontier import Frontier
from tile_search.search.models import SearchNode

SYMBOLS = {d.symbol: d for d in Direction}


def follow(node: SearchNode, moves: str) -> SearchNode:
    """Expand ``node`` along a string of move symbols."""
    for symbol in moves:
        node = node.expand(SYMBOLS[symbol])
    return node


@pytest.fixture
def start():
    """3x3 state with the blank in the centre."""
    return SearchNode(state=PuzzleState.from_string("123405678"))


@pytest.fixture
def states():
    perms = itertools.islice(itertools.permutations(range(9)), 60)
    return [PuzzleState.from_sequence(p) for p in perms]


class TestDominance:
    """Test the replacement rules."""

    def test_uc_requires_strictly_lower_cost(self, states):
        """Test UC requires strictly lower cost."""
        existing = SearchNode(state=states[0], g_cost=5)
        assert uc_dominates(SearchNode(state=states[0], g_cost=4), existing)
        assert not uc_dominates(SearchNode(state=states[0], g_cost=5), existing)
        assert not uc_dominates(SearchNode(state=states[0], g_cost=6), existing)

    def test_astar_lower_f_dominates(self, states):
        """Test A* lower f dominates."""
        existing = SearchNode(state=states[0], g_cost=3, h_cost=4)
        assert astar_dominates(SearchNode(state=states[0], g_cost=2, h_cost=4), existing)
        assert not astar_dominates(SearchNode(state=states[0], g_cost=4, h_cost=4), existing)

    def test_astar_equal_f_prefers_higher_g(self, states):
        """Test A* equal f prefers higher g."""
        existing = SearchNode(state=states[0], g_cost=2, h_cost=4)
        assert astar_dominates(SearchNode(state=states[0], g_cost=4, h_cost=2), existing)
        assert not astar_dominates(SearchNode(state=states[0], g_cost=2, h_cost=4), existing)
        assert not astar_dominates(SearchNode(state=states[0], g_cost=1, h_cost=5), existing)


class TestDuplicateResolver:
    """Test successor dispositions."""

    @pytest.fixture
    def uc_resolver(self):
        return DuplicateResolver(Frontier(uc_priority), ExpandedSet(), uc_dominates)

    def test_new_state_is_inserted(self, uc_resolver, start):
        """Test new state is inserted."""
        successor = follow(start, "U")
        assert uc_resolver.resolve(successor) is Disposition.INSERTED
        assert len(uc_resolver.frontier) == 1

    def test_expanded_state_is_rejected(self, uc_resolver, start):
        """Test expanded state is rejected."""
        successor = follow(start, "U")
        uc_resolver.expanded.insert(successor.key)

        assert uc_resolver.resolve(successor) is Disposition.ALREADY_EXPANDED
        assert len(uc_resolver.frontier) == 0

    def test_cheaper_path_replaces_queued_node(self, uc_resolver, start):
        """Test cheaper path replaces queued node."""
        # Twelve moves around a 2x2 block restore the board, so both reach the same state
        long_way = follow(start, "URDL" * 3 + "U")
        short_way = follow(start, "U")
        assert long_way.key == short_way.key
        assert long_way.g_cost == 13

        uc_resolver.resolve(long_way)
        disposition = uc_resolver.resolve(short_way)

        assert disposition is Disposition.REPLACED
        assert len(uc_resolver.frontier) == 1
        survivor = uc_resolver.frontier.peek_min()
        assert survivor is short_way
        assert survivor.path == "U"
        assert uc_resolver.frontier.mid_heap_deletions == 1

    def test_costlier_path_is_discarded(self, uc_resolver, start):
        """Test costlier path is discarded."""
        short_way = follow(start, "U")
        long_way = follow(start, "URDL" * 3 + "U")

        uc_resolver.resolve(short_way)
        disposition = uc_resolver.resolve(long_way)

        assert disposition is Disposition.DISCARDED
        assert uc_resolver.frontier.peek_min() is short_way
        assert uc_resolver.frontier.mid_heap_deletions == 0

    def test_equal_cost_is_discarded(self, uc_resolver, states):
        """Test equal cost is discarded."""
        first = SearchNode(state=states[3], g_cost=4)
        second = SearchNode(state=states[3], g_cost=4)

        uc_resolver.resolve(first)

        assert uc_resolver.resolve(second) is Disposition.DISCARDED
        assert uc_resolver.frontier.peek_min() is first

    def test_astar_equal_f_deeper_node_replaces(self, states):
        """Test A* equal f deeper node replaces."""
        resolver = DuplicateResolver(Frontier(astar_priority), ExpandedSet(), astar_dominates)
        for state in states[10:20]:
            resolver.resolve(SearchNode(state=state, g_cost=1, h_cost=1))
        shallow = SearchNode(state=states[0], g_cost=2, h_cost=4)
        deep = SearchNode(state=states[0], g_cost=4, h_cost=2)

        resolver.resolve(shallow)

        assert resolver.resolve(deep) is Disposition.REPLACED
        assert len(resolver.frontier) == 11
        assert resolver.frontier.is_heap()
        index = resolver.frontier.find_by_state_key(states[0].to_string())
        assert resolver.frontier.node_at(index) is deep


class TestParallelScan:
    """Test the multi-worker frontier scan."""

    @pytest.fixture
    def populated(self, states):
        frontier = Frontier(uc_priority)
        for i, state in enumerate(states[:45]):
            frontier.insert(SearchNode(state=state, g_cost=i % 9))
        return frontier

    def test_parallel_find_matches_sequential(self, populated, states):
        """Test parallel find matches sequential."""
        with DuplicateResolver(populated, ExpandedSet(), uc_dominates,
                               workers=4, min_parallel_size=1) as resolver:
            assert resolver.thread_pool is not None
            for state in states[:50]:
                key = state.to_string()
                assert resolver.find(key) == populated.find_by_state_key(key)

    def test_small_frontier_is_scanned_inline(self, populated, states):
        """Test small frontier is scanned inline."""
        with DuplicateResolver(populated, ExpandedSet(), uc_dominates,
                               workers=4, min_parallel_size=1000) as resolver:
            key = states[5].to_string()
            assert resolver.find(key) == populated.find_by_state_key(key)

    def test_parallel_replacement(self, populated, states):
        """Test parallel replacement."""
        with DuplicateResolver(populated, ExpandedSet(), uc_dominates,
                               workers=3, min_parallel_size=1) as resolver:
            # states[44] is queued with g = 44 % 9 = 8
            cheaper = SearchNode(state=states[44], g_cost=0)

            assert resolver.resolve(cheaper) is Disposition.REPLACED
            assert populated.mid_heap_deletions == 1
            assert len(populated) == 45
            assert populated.is_heap()

    def test_close_shuts_down_pool(self, populated):
        """Test close shuts down pool."""
        resolver = DuplicateResolver(populated, ExpandedSet(), uc_dominates, workers=2)
        resolver.close()
        assert resolver.thread_pool is None
