"""Persistent, type-indexed resource store.

``RootState`` is a mutable builder that collects resources per class.
``finalize()`` freezes it into a ``State``: an immutable node in a
persistent tree.  Every transition on a ``State`` (producing, mapping,
consuming, tracing, flattening) returns a new node and leaves existing
nodes untouched, so many successor states can be derived from one parent
without copying it.

Resources are indexed by their exact class.  Reading ``get(R)`` only ever
returns values that were stored under ``R``.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar

from linear_state.slots import (
    BaseLayer,
    BranchLayer,
    Layer,
    TraceKey,
    TraceNode,
    depth,
    flatten,
    iter_trace,
    key_name,
    lookup,
    visible_keys,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _require_type(resource_type: Any) -> None:
    """Reject slot keys that are not classes."""
    if not isinstance(resource_type, type):
        raise TypeError(f"Resource type must be a class, got {resource_type!r}")


def _checked(resource_type: type, value: Any) -> Any:
    """Return ``value`` if its exact class is ``resource_type``.

    Raises:
        TypeError: If ``value`` would be stored under a different class.
    """
    if type(value) is not resource_type:
        raise TypeError(
            f"Cannot store {type(value).__qualname__} value {value!r} "
            f"in {resource_type.__qualname__} slot"
        )
    return value


class RootState:
    """Mutable builder for the base layer of a state tree.

    Resources are appended to the slot of their own class in insertion
    order.  ``finalize()`` hands the collected slots to an immutable
    ``State``; the builder refuses any use afterwards.
    """

    def __init__(self) -> None:
        """Initialize an empty builder."""
        self._slots: dict[type, list[Any]] = {}
        self._finalized = False

    def _ensure_open(self) -> None:
        if self._finalized:
            raise RuntimeError("RootState has already been finalized")

    def add(self, resource: Any) -> None:
        """Append ``resource`` to the slot of its class.

        Args:
            resource: Value to store.
        """
        self._ensure_open()
        self._slots.setdefault(type(resource), []).append(resource)

    def add_many(self, resources: Iterable[Any]) -> None:
        """Append every resource in ``resources``, in iteration order."""
        for resource in resources:
            self.add(resource)

    def with_(self, resource: Any) -> "RootState":
        """Fluent form of ``add``; returns this builder."""
        self.add(resource)
        return self

    def with_many(self, resources: Iterable[Any]) -> "RootState":
        """Fluent form of ``add_many``; returns this builder."""
        self.add_many(resources)
        return self

    def finalize(self) -> "State":
        """Freeze the builder into a base ``State``.

        Returns:
            Immutable state whose slots hold the added resources.

        Raises:
            RuntimeError: If the builder was already finalized.
        """
        self._ensure_open()
        self._finalized = True
        slots = {resource_type: tuple(values) for resource_type, values in self._slots.items()}
        self._slots = {}
        logger.debug("Finalized root state with %d resource types", len(slots))
        return State(BaseLayer(slots))


class State:
    """Immutable node in a persistent tree of resource slots.

    Two ``State`` objects compare equal exactly when they wrap the same
    node, so states can be used as set members and graph nodes.  Copying
    a state returns the state itself.

    Attributes:
        ancestry_depth: Number of branch hops to the base layer.
    """

    __slots__ = ("_layer",)

    def __init__(self, layer: Layer) -> None:
        """Wrap a layer node.  Use ``RootState.finalize()`` to build one."""
        self._layer = layer

    def _branch(self, key: Any, value: Any) -> "State":
        return State(BranchLayer(key, value, self._layer))

    @property
    def ancestry_depth(self) -> int:
        """Number of branch hops to the base layer (0 for a base state)."""
        return depth(self._layer)

    @property
    def parent(self) -> "State | None":
        """The state this one was derived from, or None for a base state."""
        if isinstance(self._layer, BranchLayer):
            return State(self._layer.parent)
        return None

    @property
    def overridden_key(self) -> Any:
        """Key overridden by this state's own layer, or None for a base state.

        Returns a resource type for slot writes and a ``TraceKey`` for
        ``with_trace``.
        """
        if isinstance(self._layer, BranchLayer):
            return self._layer.key
        return None

    def get(self, resource_type: type[R]) -> tuple[R, ...]:
        """Return the visible slot for ``resource_type``.

        Args:
            resource_type: Resource class to look up.

        Returns:
            Ordered values of that class; empty if never defined.
        """
        _require_type(resource_type)
        return lookup(self._layer, resource_type, ())

    def first(self, resource_type: type[R]) -> R | None:
        """Return the first value in the ``resource_type`` slot, or None."""
        slot = self.get(resource_type)
        return slot[0] if slot else None

    def has(self, resource: Any) -> bool:
        """Check whether an equal value is in the slot of its class."""
        return resource in self.get(type(resource))

    def resource_types(self) -> frozenset[type]:
        """Classes with a slot definition visible from this state."""
        return frozenset(key for key in visible_keys(self._layer) if isinstance(key, type))

    def with_produced(self, resource_type: type[R], resources: Iterable[R]) -> "State":
        """Derive a child whose ``resource_type`` slot gains ``resources``.

        Args:
            resource_type: Slot to extend.
            resources: Values appended after the existing ones.

        Returns:
            New state overriding only ``resource_type``.

        Raises:
            TypeError: If a value's exact class is not ``resource_type``.
        """
        current = self.get(resource_type)
        produced = tuple(_checked(resource_type, resource) for resource in resources)
        return self._branch(resource_type, current + produced)

    def branches_mapped(
        self,
        resource_type: type[R],
        mapper: Callable[[R], R],
        include: Callable[[R], bool] | None = None,
    ) -> Iterator[tuple["State", R]]:
        """Lazily derive one child per matching resource, replacing it.

        For each index ``i`` whose value passes ``include``, the child slot
        is the current slot without element ``i`` followed by
        ``mapper(slot[i])``.  The mapped value always lands last.

        Args:
            resource_type: Slot to branch on.
            mapper: Replacement function for the matched value.
            include: Filter over current values; None matches everything.

        Yields:
            ``(child_state, mapped_value)`` pairs in slot order.
        """
        original = self.get(resource_type)
        for index, resource in enumerate(original):
            if include is not None and not include(resource):
                continue
            mapped = _checked(resource_type, mapper(resource))
            slot = original[:index] + original[index + 1 :] + (mapped,)
            yield self._branch(resource_type, slot), mapped

    def branches_consumed(
        self,
        resource_type: type[R],
        include: Callable[[R], bool] | None = None,
    ) -> Iterator[tuple["State", R]]:
        """Lazily derive one child per matching resource, removing it.

        Yields:
            ``(child_state, removed_value)`` pairs in slot order.
        """
        original = self.get(resource_type)
        for index, resource in enumerate(original):
            if include is not None and not include(resource):
                continue
            yield self._branch(resource_type, original[:index] + original[index + 1 :]), resource

    def descend_mapped_filtered(
        self,
        resource_type: type[R],
        include: Callable[[R], bool],
        mapper: Callable[[R], R],
        callback: Callable[["State", R], None],
    ) -> None:
        """Call ``callback(child, mapped)`` for every value passing ``include``."""
        for child, mapped in self.branches_mapped(resource_type, mapper, include):
            callback(child, mapped)

    def descend_mapped(
        self,
        resource_type: type[R],
        mapper: Callable[[R], R],
        callback: Callable[["State", R], None],
    ) -> None:
        """Call ``callback(child, mapped)`` once per value in the slot."""
        self.descend_mapped_filtered(resource_type, lambda _: True, mapper, callback)

    def descend_consumed_filtered(
        self,
        resource_type: type[R],
        include: Callable[[R], bool],
        callback: Callable[["State", R], None],
    ) -> None:
        """Call ``callback(child, removed)`` for every value passing ``include``."""
        for child, removed in self.branches_consumed(resource_type, include):
            callback(child, removed)

    def descend_consumed(
        self,
        resource_type: type[R],
        callback: Callable[["State", R], None],
    ) -> None:
        """Call ``callback(child, removed)`` once per value in the slot."""
        self.descend_consumed_filtered(resource_type, lambda _: True, callback)

    def flatten(self) -> "State":
        """Collapse the ancestor chain into a single base layer.

        Every slot and trace visible from this state stays visible and
        equal; only ``ancestry_depth`` drops to 0.
        """
        return State(flatten(self._layer))

    def with_trace(self, value: Any) -> "State":
        """Derive a child that records ``value`` in the trace of its class.

        Slots are not affected.
        """
        key = TraceKey(type(value))
        return self._branch(key, TraceNode(value, lookup(self._layer, key)))

    def trace(self, resource_type: type[R]) -> Iterator[R]:
        """Iterate over recorded trace values, most recent first."""
        _require_type(resource_type)
        return iter_trace(lookup(self._layer, TraceKey(resource_type)))

    def __copy__(self) -> "State":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "State":
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self._layer is other._layer

    def __hash__(self) -> int:
        return id(self._layer)

    def __repr__(self) -> str:
        """Return the overridden key and depth of this node."""
        if isinstance(self._layer, BranchLayer):
            return f"State(override={key_name(self._layer.key)}, depth={self.ancestry_depth})"
        return f"State(base, types={len(self._layer.slots)})"
