"""Layer nodes backing the persistent resource store.

A state is a chain of layers ending in a single ``BaseLayer``.  A base
layer maps keys to slots directly; a ``BranchLayer`` overrides exactly one
key and points at its parent.  Layers are never mutated once built, so
siblings can share a parent freely.

Keys are either resource classes (for slots) or ``TraceKey`` wrappers (for
trace heads), so slot and trace lookups share one walk without colliding.
"""

from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Any, NamedTuple

_MISSING: Any = object()


class TraceKey(NamedTuple):
    """Key under which the most recent trace node for a class is stored.

    Attributes:
        resource_type: Class whose values the trace records.
    """

    resource_type: type


@dataclass(frozen=True, eq=False)
class TraceNode:
    """One recorded trace value and a link to the value recorded before it.

    Attributes:
        value: The recorded value.
        previous: Older trace node for the same class, or None.
    """

    value: Any
    previous: "TraceNode | None"


@dataclass(frozen=True, eq=False)
class BaseLayer:
    """Flat layer holding one definition per key.

    Attributes:
        slots: Map from key to its definition (a slot tuple or a TraceNode).
    """

    slots: dict[Hashable, Any]


@dataclass(frozen=True, eq=False)
class BranchLayer:
    """Layer overriding a single key on top of a parent layer.

    Attributes:
        key: The overridden key.
        value: Definition visible for ``key`` from this layer down.
        parent: Layer this branch was derived from.
    """

    key: Hashable
    value: Any
    parent: "Layer"


Layer = BaseLayer | BranchLayer


def lookup(layer: Layer, key: Hashable, default: Any = None) -> Any:
    """Return the nearest definition of ``key`` walking toward the base.

    Args:
        layer: Layer to start the walk from.
        key: Resource class or TraceKey to resolve.
        default: Value returned when no layer defines ``key``.

    Returns:
        The most-derived definition of ``key``, or ``default``.
    """
    current = layer
    while isinstance(current, BranchLayer):
        if current.key == key:
            return current.value
        current = current.parent
    value = current.slots.get(key, _MISSING)
    return default if value is _MISSING else value


def flatten(layer: Layer) -> BaseLayer:
    """Collapse a layer chain into a single base layer.

    Each key keeps its nearest definition; keys only defined in the base
    keep their original definition.  Flattening a base layer returns it
    unchanged.

    Args:
        layer: Layer to collapse.

    Returns:
        A base layer observationally equal to ``layer``.
    """
    if isinstance(layer, BaseLayer):
        return layer
    flat: dict[Hashable, Any] = {}
    current = layer
    while isinstance(current, BranchLayer):
        flat.setdefault(current.key, current.value)
        current = current.parent
    for key, value in current.slots.items():
        flat.setdefault(key, value)
    return BaseLayer(flat)


def depth(layer: Layer) -> int:
    """Count branch hops from ``layer`` to its base layer."""
    hops = 0
    current = layer
    while isinstance(current, BranchLayer):
        hops += 1
        current = current.parent
    return hops


def visible_keys(layer: Layer) -> set[Hashable]:
    """Collect every key with a definition visible from ``layer``."""
    keys: set[Hashable] = set()
    current = layer
    while isinstance(current, BranchLayer):
        keys.add(current.key)
        current = current.parent
    keys.update(current.slots)
    return keys


def iter_trace(node: TraceNode | None) -> Iterator[Any]:
    """Yield trace values from ``node`` back to the oldest recorded one."""
    while node is not None:
        yield node.value
        node = node.previous


def key_name(key: Hashable) -> str:
    """Readable name for a layer key, used in reprs and lineage graphs."""
    if isinstance(key, TraceKey):
        return f"trace:{key.resource_type.__qualname__}"
    if isinstance(key, type):
        return key.__qualname__
    return repr(key)
