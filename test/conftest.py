"""Shared test utilities and fixtures for pytest."""

from collections.abc import Callable
from dataclasses import dataclass

import pytest

from linear_state import RootState, SearchCollector, State


@dataclass(frozen=True)
class At:
    """Current position of the walker."""

    place: str


@dataclass(frozen=True)
class Path:
    """Directed edge between two places."""

    source: str
    target: str


@dataclass(frozen=True)
class Count:
    """Number of steps taken so far."""

    value: int


WALK_EDGES = [("A", "B"), ("B", "C"), ("A", "D"), ("D", "B"), ("A", "F"), ("D", "X"), ("X", "Y")]


def make_walk_state(edges: list[tuple[str, str]], start: str) -> State:
    """Build a base state positioned at ``start`` with a zero step counter.

    Args:
        edges: ``(source, target)`` pairs stored as Path resources.
        start: Initial place.

    Returns:
        Finalized state holding one At, one Count and the Path resources.
    """
    return (
        RootState()
        .with_(Count(0))
        .with_(At(start))
        .with_many(Path(source, target) for source, target in edges)
        .finalize()
    )


def walk(state: State, collector: SearchCollector) -> None:
    """Successor generator: follow every path leaving the current place.

    Consumes the At token, increments the Count and produces a new At per
    outgoing path.
    """

    def on_consumed(after_move: State, at: At) -> None:
        def on_counted(counted: State, _: Count) -> None:
            for path in counted.get(Path):
                if path.source == at.place:
                    collector.push(counted.with_produced(At, [At(path.target)]))

        after_move.descend_mapped(Count, lambda prev: Count(prev.value + 1), on_counted)

    state.descend_consumed(At, on_consumed)


def at_place(place: str) -> Callable[[State], bool]:
    """Goal predicate factory matching states positioned at ``place``."""
    return lambda state: state.has(At(place))


@pytest.fixture
def walk_start() -> State:
    """Fixture providing the start state of the seven-edge walk graph."""
    return make_walk_state(WALK_EDGES, "A")


@pytest.fixture
def letters_state() -> State:
    """Fixture providing a base state with slot ``[x, y, z]`` of str."""
    return RootState().with_many(["x", "y", "z"]).finalize()
