"""Level-synchronous search over persistent states.

Drives breadth-first exploration with three pluggable strategies: a
successor generator, a goal predicate and a frontier control hook.
Control hook factories and run statistics live alongside the driver.
"""

from linear_state.search.control import FrontierLimits, chain_controls, frontier_control, retain_control
from linear_state.search.search import FrontierView, SearchCollector, search
from linear_state.search.stats import GenerationRecord, SearchStats

__all__ = [
    "search",
    "SearchCollector",
    "FrontierView",
    "FrontierLimits",
    "frontier_control",
    "retain_control",
    "chain_controls",
    "SearchStats",
    "GenerationRecord",
]
