"""linear_state - persistent state trees and level-synchronous search.

Pipeline: RootState builder -> finalize -> State branching -> search

Subpackages:
    state: RootState builder and immutable, structurally shared State
    slots: Layer nodes, nearest-ancestor lookup, flatten and trace nodes
    search: Breadth-first driver, frontier control hooks and run statistics
    lineage: Derivation graphs of state trees
    utils: Logging configuration
"""

from linear_state.lineage import ancestors, lineage_graph
from linear_state.search import (
    FrontierLimits,
    FrontierView,
    SearchCollector,
    SearchStats,
    chain_controls,
    frontier_control,
    retain_control,
    search,
)
from linear_state.state import RootState, State

__version__ = "0.1.0"

__all__ = [
    "RootState",
    "State",
    "search",
    "SearchCollector",
    "FrontierView",
    "FrontierLimits",
    "frontier_control",
    "retain_control",
    "chain_controls",
    "SearchStats",
    "ancestors",
    "lineage_graph",
]
