"""Duplicate resolution for freshly generated successors.

Each successor is either dropped (its state was already expanded, or an equal
or better node for it is queued), inserted, or swapped in for a dominated
queued node. The frontier scan can be split across a thread pool; workers only
read a snapshot and the resulting mutation always happens on the caller's
thread.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Optional, Sequence

from tile_search.search.comparators import DominanceFunction
from tile_search.search.expanded import ExpandedSet
from tile_search.search.frontier import Frontier
from tile_search.search.models import SearchNode

logger = logging.getLogger(__name__)


class Disposition(Enum):
    """What happened to a successor."""
    ALREADY_EXPANDED = "already_expanded"
    INSERTED = "inserted"
    REPLACED = "replaced"
    DISCARDED = "discarded"


class _FoundIndex:
    """First-writer-wins slot shared by scan workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._index: Optional[int] = None

    def publish(self, index: int) -> None:
        with self._lock:
            if self._index is None:
                self._index = index

    @property
    def index(self) -> Optional[int]:
        with self._lock:
            return self._index


class DuplicateResolver:
    """Routes successors into the frontier under a dominance rule."""

    def __init__(self,
                 frontier: Frontier,
                 expanded: ExpandedSet,
                 dominates: DominanceFunction,
                 workers: int = 1,
                 min_parallel_size: int = 256):
        """Initialize the resolver.

        Args:
            frontier: Frontier receiving admitted successors
            expanded: Expanded set consulted before the frontier scan
            dominates: ``dominates(candidate, existing)`` replacement rule
            workers: Number of scan workers; 1 scans inline
            min_parallel_size: Smallest frontier worth scanning in parallel
        """
        self.frontier = frontier
        self.expanded = expanded
        self.dominates = dominates
        self.workers = max(1, int(workers))
        self.min_parallel_size = max(1, int(min_parallel_size))

        if self.workers > 1:
            self.thread_pool: Optional[ThreadPoolExecutor] = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="frontier-scan"
            )
        else:
            self.thread_pool = None

    def resolve(self, successor: SearchNode) -> Disposition:
        """Decide and apply the disposition of ``successor``."""
        if self.expanded.contains(successor.key):
            return Disposition.ALREADY_EXPANDED

        index = self.find(successor.key)
        if index is None:
            self.frontier.insert(successor)
            return Disposition.INSERTED

        existing = self.frontier.node_at(index)
        if self.dominates(successor, existing):
            self.frontier.remove_at(index)
            self.frontier.insert(successor)
            logger.debug(f"Replaced {existing.key}: g {existing.g_cost} -> {successor.g_cost}, "
                         f"f {existing.f_cost} -> {successor.f_cost}")
            return Disposition.REPLACED

        return Disposition.DISCARDED

    def find(self, key: str) -> Optional[int]:
        """Index of the queued node for ``key``, or None."""
        if self.thread_pool is None or len(self.frontier) < self.min_parallel_size:
            return self.frontier.find_by_state_key(key)
        return self._parallel_find(key)

    def _parallel_find(self, key: str) -> Optional[int]:
        snapshot = self.frontier.snapshot()
        found = _FoundIndex()

        chunk_size = -(-len(snapshot) // self.workers)
        futures = []
        for start in range(0, len(snapshot), chunk_size):
            futures.append(self.thread_pool.submit(
                self._scan_slice, snapshot, start, min(start + chunk_size, len(snapshot)), key, found
            ))
        for future in futures:
            future.result()

        return found.index

    @staticmethod
    def _scan_slice(snapshot: Sequence[SearchNode], start: int, stop: int,
                    key: str, found: _FoundIndex) -> None:
        for index in range(start, stop):
            if snapshot[index].key == key:
                found.publish(index)
                return

    def close(self) -> None:
        """Shut down the scan workers, if any."""
        if self.thread_pool is not None:
            self.thread_pool.shutdown(wait=True)
            self.thread_pool = None

    def __enter__(self) -> 'DuplicateResolver':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
