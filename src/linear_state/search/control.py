"""Frontier control hooks.

The search driver has no built-in limits; these factories build control
hooks that bound frontier width, cap the number of generations, shuffle
the exploration order, or filter states.  Hooks compose with
``chain_controls``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from linear_state.search.search import Control, FrontierView
from linear_state.state import State

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrontierLimits:
    """Limits applied to every solution-free frontier.

    Attributes:
        max_width: Keep at most this many states per generation (None for no limit).
        max_generations: Drain the frontier once this many generations have
            been expanded, so no state deeper than this is ever built.
        shuffle: Randomly permute the frontier before truncating it.
    """

    max_width: int | None = None
    max_generations: int | None = None
    shuffle: bool = False

    def __post_init__(self) -> None:
        """Validate the limits.

        Raises:
            ValueError: If a limit is set but not positive.
        """
        if self.max_width is not None and self.max_width < 1:
            raise ValueError(f"max_width must be positive, got {self.max_width}")
        if self.max_generations is not None and self.max_generations < 1:
            raise ValueError(f"max_generations must be positive, got {self.max_generations}")


def frontier_control(limits: FrontierLimits) -> Control:
    """Build a control hook enforcing ``limits``.

    The generation cap is checked first; shuffling happens before
    truncation so a randomized subset survives.

    Args:
        limits: Limits to enforce.

    Returns:
        Control hook for ``search``.
    """

    def control(view: FrontierView) -> None:
        if limits.max_generations is not None and view.generation >= limits.max_generations:
            logger.debug("Generation cap %d reached, dropping %d states", limits.max_generations, view.count)
            view.clear()
            return
        if limits.shuffle:
            view.shuffle()
        if limits.max_width is not None and view.count > limits.max_width:
            logger.debug("Truncating frontier from %d to %d states", view.count, limits.max_width)
            view.truncate(limits.max_width)

    return control


def retain_control(condition: Callable[[State], bool]) -> Control:
    """Build a control hook keeping only states satisfying ``condition``."""

    def control(view: FrontierView) -> None:
        view.retain(condition)

    return control


def chain_controls(*hooks: Control) -> Control:
    """Compose control hooks, applying them in the given order."""

    def control(view: FrontierView) -> None:
        for hook in hooks:
            hook(view)

    return control
