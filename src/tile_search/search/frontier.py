"""Priority frontier with removal of interior entries.

The frontier is a binary min-heap (``heapq``) of ``(priority, sequence, node)``
entries. ``priority`` comes from an injected priority function; ``sequence``
is an insertion counter, so equal priorities pop in insertion order and runs
are reproducible. The heap is not indexed by state, so locating a node by its
state key is a linear scan and removing it costs a full ``heapify``.
"""

import heapq
import logging
from typing import Iterator, List, Optional, Tuple

from tile_search.search.comparators import PriorityFunction
from tile_search.search.models import SearchNode

logger = logging.getLogger(__name__)


class EmptyFrontierError(IndexError):
    """Raised when popping from an empty frontier."""
    pass


class Frontier:
    """Min-heap of open search nodes ordered by a priority function."""

    def __init__(self, priority: PriorityFunction):
        """Initialize an empty frontier.

        Args:
            priority: Maps a node to a sortable tuple; smallest pops first
        """
        self.priority = priority
        self._heap: List[Tuple[Tuple[int, ...], int, SearchNode]] = []
        self._sequence = 0
        self.mid_heap_deletions = 0

    def insert(self, node: SearchNode) -> None:
        self._sequence += 1
        heapq.heappush(self._heap, (self.priority(node), self._sequence, node))

    def extract_min(self) -> SearchNode:
        """Remove and return the best node.

        Raises:
            EmptyFrontierError: If the frontier is empty
        """
        if not self._heap:
            raise EmptyFrontierError("extract_min() on an empty frontier")
        return heapq.heappop(self._heap)[2]

    def find_by_state_key(self, key: str) -> Optional[int]:
        """Index of the queued node for ``key``, or None."""
        for index, entry in enumerate(self._heap):
            if entry[2].key == key:
                return index
        return None

    def node_at(self, index: int) -> SearchNode:
        return self._heap[index][2]

    def remove_at(self, index: int) -> SearchNode:
        """Delete the entry at ``index`` and restore heap order.

        Counts as one deletion from the middle of the heap.
        """
        entry = self._heap.pop(index)
        heapq.heapify(self._heap)
        self.mid_heap_deletions += 1
        logger.debug(f"Removed {entry[2].key} (g={entry[2].g_cost}) from frontier position {index}")
        return entry[2]

    def snapshot(self) -> Tuple[SearchNode, ...]:
        """Read-only copy of the backing storage, in heap order."""
        return tuple(entry[2] for entry in self._heap)

    def peek_min(self) -> Optional[SearchNode]:
        return self._heap[0][2] if self._heap else None

    def peek_max(self) -> Optional[SearchNode]:
        """Worst queued node under the active ordering."""
        if not self._heap:
            return None
        return max(self._heap, key=lambda entry: entry[:2])[2]

    def drain(self) -> List[SearchNode]:
        """Empty the frontier, returning what was left in pop order."""
        remaining = [entry[2] for entry in sorted(self._heap, key=lambda entry: entry[:2])]
        self._heap.clear()
        return remaining

    def size(self) -> int:
        return len(self._heap)

    def is_heap(self) -> bool:
        """Check the heap property over every parent/child pair."""
        heap = self._heap
        for child in range(1, len(heap)):
            parent = (child - 1) // 2
            if heap[child][:2] < heap[parent][:2]:
                return False
        return True

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[SearchNode]:
        return iter(self.snapshot())
