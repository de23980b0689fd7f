"""Ancestry inspection for persistent state trees.

Builds a ``networkx`` view of how states were derived from one another,
which makes structural sharing between sibling branches visible.
"""

from collections.abc import Iterable, Iterator

import networkx as nx

from linear_state.slots import key_name
from linear_state.state import State


def ancestors(state: State) -> Iterator[State]:
    """Yield ``state`` and then each ancestor up to the base layer."""
    current: State | None = state
    while current is not None:
        yield current
        current = current.parent


def _node_attrs(state: State, level: int) -> dict[str, object]:
    """Describe the layer wrapped by ``state`` at ancestry depth ``level``."""
    key = state.overridden_key
    if key is None:
        return {"kind": "base", "key": None, "depth": 0}
    return {"kind": "branch", "key": key_name(key), "depth": level}


def lineage_graph(states: Iterable[State]) -> nx.DiGraph:
    """Build the derivation graph covering ``states`` and their ancestors.

    Nodes are ``State`` objects (shared ancestors appear once); edges point
    from parent to child.

    Args:
        states: States whose lineage to include.

    Returns:
        Directed forest with ``kind``, ``key`` and ``depth`` node attributes.
    """
    graph = nx.DiGraph()
    for state in states:
        if state in graph:
            continue
        level = state.ancestry_depth
        child: State | None = None
        for node in ancestors(state):
            seen = node in graph
            if not seen:
                graph.add_node(node, **_node_attrs(node, level))
            if child is not None:
                graph.add_edge(node, child)
            if seen:
                break
            child = node
            level -= 1
    return graph
