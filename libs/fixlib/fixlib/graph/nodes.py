"""Constant nodes and the program graph that holds them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from fixlib.binding.values import FixedValue
from fixlib.core.format import FormatDescriptor
from fixlib.diagnostics.location import SourceLocation


@dataclass(frozen=True)
class ConstantNode:
    """A named constant whose values all share one fixed-point format.

    ``scalar`` marks constants declared from a single expression rather than
    a sample list; they hold exactly one value and may be referenced inside
    other value expressions.
    """

    name: str
    format: FormatDescriptor
    values: tuple[FixedValue, ...]
    scalar: bool = False
    tolerance: float | None = None
    location: SourceLocation | None = None

    @property
    def value(self) -> FixedValue:
        """The single value of a scalar constant."""
        if not self.scalar:
            raise TypeError(f"Constant {self.name} is a sample list, not a scalar")
        return self.values[0]

    def unbound(self) -> tuple[float, ...]:
        return tuple(float(v) for v in self.values)

    def __len__(self) -> int:
        return len(self.values)


class Graph:
    """Ordered collection of constant nodes, addressable by name."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._nodes: dict[str, ConstantNode] = {}

    def add(self, node: ConstantNode) -> None:
        if node.name in self._nodes:
            raise ValueError(f"Duplicate constant {node.name}")
        self._nodes[node.name] = node

    def get(self, name: str) -> ConstantNode | None:
        return self._nodes.get(name)

    def __getitem__(self, name: str) -> ConstantNode:
        return self._nodes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[ConstantNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def names(self) -> list[str]:
        return list(self._nodes)

    def formats(self) -> dict[str, FormatDescriptor]:
        """Map each constant name to its format."""
        return {name: node.format for name, node in self._nodes.items()}
