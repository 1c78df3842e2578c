"""Frontier ordering and duplicate-dominance rules for each search variant.

A priority function maps a node to a sortable tuple; the frontier pops the
smallest. A dominance function decides whether a new node for a state should
replace the node already queued for that state.
"""

from typing import TYPE_CHECKING, Callable, Tuple

if TYPE_CHECKING:
    from tile_search.search.models import SearchNode

PriorityFunction = Callable[['SearchNode'], Tuple[int, ...]]
DominanceFunction = Callable[['SearchNode', 'SearchNode'], bool]


def uc_priority(node: 'SearchNode') -> Tuple[int, ...]:
    """Ascending path cost only."""
    return (node.g_cost,)


def astar_priority(node: 'SearchNode') -> Tuple[int, ...]:
    """Ascending f-cost; equal f-costs prefer the larger g-cost."""
    return (node.f_cost, -node.g_cost)


def uc_dominates(candidate: 'SearchNode', existing: 'SearchNode') -> bool:
    return candidate.g_cost < existing.g_cost


def astar_dominates(candidate: 'SearchNode', existing: 'SearchNode') -> bool:
    if candidate.f_cost != existing.f_cost:
        return candidate.f_cost < existing.f_cost
    return candidate.g_cost > existing.g_cost
