"""Level-synchronous breadth-first search over ``State`` frontiers.

Each generation expands every frontier state through a caller-supplied
generator, tests every pushed successor against the goal, and stops at the
first generation that yields any goal state.  When no goal is found the
new frontier is handed to a control hook, which is the only place width,
depth or ordering limits are applied.
"""

import logging
from collections.abc import Callable, Iterable

import numpy as np
from tqdm import tqdm

from linear_state.search.stats import SearchStats
from linear_state.state import State

logger = logging.getLogger(__name__)

Successors = Callable[[State, "SearchCollector"], None]
Goal = Callable[[State], bool]
Control = Callable[["FrontierView"], None]


class SearchCollector:
    """Push-only sink handed to the successor generator."""

    __slots__ = ("_container",)

    def __init__(self, container: list[State]) -> None:
        """Wrap the next-frontier buffer.

        Args:
            container: List that receives pushed states.
        """
        self._container = container

    def push(self, state: State) -> None:
        """Add a successor state to the next frontier."""
        self._container.append(state)


class FrontierView:
    """Mutable view of the next frontier handed to the control hook.

    The view can only shrink or reorder the frontier; it has no way to
    add states that the generator did not push.

    Attributes:
        generation: 1-based number of the generation that built this frontier.
    """

    __slots__ = ("_container", "generation", "_rng")

    def __init__(self, container: list[State], generation: int, rng: np.random.Generator) -> None:
        """Wrap the next-frontier buffer.

        Args:
            container: The frontier list to expose.
            generation: 1-based generation counter.
            rng: Generator used by ``shuffle``.
        """
        self._container = container
        self.generation = generation
        self._rng = rng

    @property
    def count(self) -> int:
        """Number of states currently in the frontier."""
        return len(self._container)

    @property
    def states(self) -> tuple[State, ...]:
        """Snapshot of the frontier contents in order."""
        return tuple(self._container)

    def clear(self) -> None:
        """Drop every state, ending the search after this generation."""
        self._container.clear()

    def truncate(self, max_size: int) -> None:
        """Keep only the first ``max_size`` states.

        Raises:
            ValueError: If ``max_size`` is negative.
        """
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        del self._container[max_size:]

    def shuffle(self) -> None:
        """Randomly permute the frontier using the search's generator."""
        order = self._rng.permutation(len(self._container))
        self._container[:] = [self._container[i] for i in order]

    def retain(self, condition: Callable[[State], bool]) -> None:
        """Keep only the states for which ``condition`` holds, in order."""
        self._container[:] = [state for state in self._container if condition(state)]


def search(
    initial: Iterable[State],
    generator: Successors,
    goal: Goal,
    control: Control | None = None,
    *,
    rng: int | np.random.Generator | None = None,
    stats: SearchStats | None = None,
    progress: bool = False,
) -> list[State]:
    """Breadth-first search returning every goal state at the minimal depth.

    Args:
        initial: Starting frontier.  An empty frontier yields no solutions.
        generator: Called once per frontier state as ``generator(state, sink)``;
            pushes zero or more successors into ``sink``.
        goal: Predicate selecting solution states.
        control: Optional hook receiving a ``FrontierView`` of every
            solution-free generation before it is expanded.
        rng: Seed or numpy Generator backing ``FrontierView.shuffle``.
        stats: Optional record updated with per-generation counts.
        progress: Show a tqdm progress bar over generations.

    Returns:
        Goal states from the first generation containing any, in push
        order; empty when the frontier runs out first.
    """
    current = list(initial)
    following: list[State] = []
    random_gen = np.random.default_rng(rng)
    generation = 0
    pbar = tqdm(desc="Searching", unit="generations", disable=not progress)
    try:
        while True:
            generation += 1
            following.clear()
            if not current:
                logger.info("Search exhausted after %d generations without a solution", generation - 1)
                return []

            sink = SearchCollector(following)
            for state in current:
                generator(state, sink)
            logger.debug("Generation %d: expanded %d states into %d", generation, len(current), len(following))

            pbar.update(1)
            pushed = len(following)
            solutions = [state for state in following if goal(state)]
            if solutions:
                if stats is not None:
                    stats.record(generation, len(current), pushed, len(solutions), None)
                logger.info("Found %d solutions at generation %d", len(solutions), generation)
                return solutions

            if control is not None:
                control(FrontierView(following, generation, random_gen))
            if stats is not None:
                stats.record(generation, len(current), pushed, 0, len(following))
            pbar.set_postfix(width=len(following))
            current, following = following, current
    finally:
        pbar.close()
