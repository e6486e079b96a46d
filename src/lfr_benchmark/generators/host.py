"""
Host Graph Protocol
===================

The generator never depends on a concrete graph class. It only needs
the handful of operations below, which ``networkx.Graph`` and
``networkx.DiGraph`` already provide.
"""

from typing import Any, Hashable, Iterable, Protocol, runtime_checkable


@runtime_checkable
class HostGraph(Protocol):
    """Capability set the LFR generator requires from a graph."""

    def nodes(self) -> Iterable[Hashable]:
        ...

    def add_edge(self, u: Hashable, v: Hashable) -> Any:
        ...

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        ...

    def degree(self, node: Hashable) -> int:
        ...

    def is_directed(self) -> bool:
        ...

    def number_of_nodes(self) -> int:
        ...
