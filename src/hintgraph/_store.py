"""Append-only arena of nodes addressed by integer handles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._errors import NodeIndexError, UnsetOutputError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from ._node import Node


class NodeStore:
    """Ordered, growable sequence of nodes.

    A node's index is its identity. Indices are handed out in strictly
    increasing order and never reused; the only mutation after a node is
    appended is replacing it with a copy carrying a new output.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: list[Node] | None = None) -> None:
        self._nodes: list[Node] = [] if nodes is None else nodes

    def append(self, factory: Callable[[int], Node]) -> int:
        """Create a node with the next free index and append it.

        Args:
            factory: Called with the new index, returns the node to store.

        Returns:
            The index of the appended node.

        """
        index = len(self._nodes)
        node = factory(index)
        if node.id != index:
            msg = f"Node id {node.id} does not match its position {index}"
            raise ValueError(msg)
        self._nodes.append(node)
        return index

    def require(self, index: int) -> int:
        """Validate that ``index`` refers to an existing node.

        Negative indices are rejected rather than counted from the end.

        Raises:
            NodeIndexError: If the index is out of range.

        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._nodes):
            raise NodeIndexError(index, len(self._nodes))
        return index

    def get(self, index: int) -> Node:
        """Get the node at ``index``.

        Raises:
            NodeIndexError: If the index is out of range.

        """
        return self._nodes[self.require(index)]

    def output_of(self, index: int, *, reader: int | None = None) -> int:
        """Get the output of the node at ``index``.

        Args:
            index: The node to read.
            reader: The node reading it, used in the error message.

        Raises:
            NodeIndexError: If the index is out of range.
            UnsetOutputError: If the node has not been filled.

        """
        output = self.get(index).output
        if output is None:
            raise UnsetOutputError(index, reader)
        return output

    def replace(self, node: Node) -> None:
        """Replace the node at ``node.id`` with an updated copy of itself."""
        current = self.get(node.id)
        if type(current) is not type(node):
            msg = f"Cannot replace {current.kind} node {node.id} with a {node.kind} node"
            raise TypeError(msg)
        self._nodes[node.id] = node

    def copy(self) -> NodeStore:
        """Return an independent store with the same nodes."""
        # Nodes are immutable, a shallow list copy is enough
        return NodeStore(list(self._nodes))

    def __getitem__(self, index: int) -> Node:
        return self.get(index)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"NodeStore({self._nodes!r})"
