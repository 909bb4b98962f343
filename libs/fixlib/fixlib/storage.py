"""Uniform read/write closures over heterogeneous value stores.

An adapter is a pair of closures, ``read(index) -> value`` and
``write(index, value) -> None``. Adapters never inspect the values they move,
so a :class:`~fixlib.binding.values.FixedValue` passes through any of them
unchanged; :func:`float_backed_adapter` is the one adapter that converts, for
backends that can only hold plain floats.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping, MutableSequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fixlib.binding.binder import DynamicTypeBinder
from fixlib.binding.values import FixedValue
from fixlib.core.errors import FormatMismatchError
from fixlib.core.format import FormatDescriptor
from fixlib.graph.nodes import ConstantNode

T = TypeVar("T")

Reader = Callable[[int], T]
Writer = Callable[[int, T], None]


@dataclass(frozen=True)
class StorageAdapter(Generic[T]):
    """A ``read``/``write`` closure pair addressed by integer index."""

    read: Reader[T]
    write: Writer[T]

    def __getitem__(self, index: int) -> T:
        return self.read(index)

    def __setitem__(self, index: int, value: T) -> None:
        self.write(index, value)


def sequence_adapter(items: MutableSequence[T]) -> StorageAdapter[T]:
    """Adapter over a list-like store; indexes must already exist."""

    def write(index: int, value: T) -> None:
        items[index] = value

    return StorageAdapter(items.__getitem__, write)


def mapping_adapter(items: MutableMapping[int, T]) -> StorageAdapter[T]:
    """Adapter over a dict-like store; writing creates missing keys."""

    def write(index: int, value: T) -> None:
        items[index] = value

    return StorageAdapter(items.__getitem__, write)


def float_backed_adapter(
    inner: StorageAdapter[Any],
    binder: DynamicTypeBinder,
    descriptor: FormatDescriptor,
) -> StorageAdapter[FixedValue]:
    """Adapter holding typed values in a store that only understands floats.

    Writes store ``binder.unbind(value)``; reads return
    ``binder.bind(descriptor, stored)``.
    """

    def read(index: int) -> FixedValue:
        return binder.bind(descriptor, inner.read(index))

    def write(index: int, value: FixedValue) -> None:
        inner.write(index, binder.unbind(value))

    return StorageAdapter(read, write)


def node_adapter(node: ConstantNode) -> StorageAdapter[FixedValue]:
    """Adapter over a copy of a constant node's values.

    The node itself is immutable; writes land in the adapter's own list and
    must carry the node's format.
    """
    items = list(node.values)

    def write(index: int, value: FixedValue) -> None:
        if not isinstance(value, FixedValue):
            raise TypeError(f"Expected a FixedValue, got {type(value).__name__}")
        if value.format != node.format:
            raise FormatMismatchError(f"Constant {node.name} holds {node.format} values, not {value.format}")
        items[index] = value

    return StorageAdapter(items.__getitem__, write)
