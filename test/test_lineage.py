"""Tests for linear_state.lineage ancestry inspection.

Run with: pytest test/test_lineage.py -v
"""

import networkx as nx
from conftest import At, at_place, walk

from linear_state import State, ancestors, lineage_graph, search


class TestAncestors:
    """Tests for ancestors()."""

    def test_walks_to_base(self, walk_start: State) -> None:
        """ancestors yields the state first and the base last."""
        child = walk_start.with_produced(At, [At("B")]).with_trace(1)
        chain = list(ancestors(child))
        assert chain[0] == child
        assert chain[-1] == walk_start
        assert len(chain) == child.ancestry_depth + 1

    def test_base_state(self, walk_start: State) -> None:
        """A base state is its own only ancestor."""
        assert list(ancestors(walk_start)) == [walk_start]


class TestLineageGraph:
    """Tests for lineage_graph()."""

    def test_siblings_share_parent(self, letters_state: State) -> None:
        """Sibling branches hang off one shared parent node."""
        children = [st for st, _ in letters_state.branches_consumed(str)]
        graph = lineage_graph(children)
        assert graph.number_of_nodes() == 4
        assert set(graph.successors(letters_state)) == set(children)
        assert nx.is_arborescence(graph)

    def test_node_attributes(self, letters_state: State) -> None:
        """Nodes carry kind, overridden key name and depth."""
        child = letters_state.with_trace(5)
        graph = lineage_graph([child])
        assert graph.nodes[letters_state] == {"kind": "base", "key": None, "depth": 0}
        assert graph.nodes[child] == {"kind": "branch", "key": "trace:int", "depth": 1}

    def test_search_solutions_tree(self, walk_start: State) -> None:
        """Solutions of one search form a single tree rooted at the start state."""
        solutions = search([walk_start], walk, at_place("Y"))
        graph = lineage_graph(solutions)
        roots = [node for node, degree in graph.in_degree() if degree == 0]
        assert roots == [walk_start]
        assert all(graph.nodes[s]["depth"] == 9 for s in solutions)

    def test_ancestor_listed_first(self, letters_state: State) -> None:
        """Passing an ancestor before its descendant still links them."""
        child = letters_state.with_produced(str, ["w"])
        graph = lineage_graph([letters_state, child])
        assert list(graph.edges) == [(letters_state, child)]

    def test_depth_matches_ancestry(self, letters_state: State) -> None:
        """Depth attributes along a long chain match each node's ancestry_depth."""
        state = letters_state
        for value in range(12):
            state = state.with_trace(value)
        middle = list(ancestors(state))[5]
        graph = lineage_graph([middle, state])
        assert graph.number_of_nodes() == 13
        assert all(graph.nodes[node]["depth"] == node.ancestry_depth for node in graph)
