"""Strict expanded list: canonical keys of states that were already expanded."""

from typing import Iterator, Set


class ExpandedSet:
    """Grow-only set of state keys.

    Membership means the state must not be expanded again and no node for it
    may enter the frontier.
    """

    def __init__(self) -> None:
        self._keys: Set[str] = set()

    def contains(self, key: str) -> bool:
        return key in self._keys

    def insert(self, key: str) -> None:
        self._keys.add(key)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(frozenset(self._keys))
