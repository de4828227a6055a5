"""Node variants of a computation graph.

A node is exactly one of four variants. Each variant is an immutable record
and exposes the same read-only view (``inputs``, ``operation``, ``output``,
``hint_link``), so code that only inspects nodes does not need to care which
variant it holds.
"""

from dataclasses import dataclass, replace
from enum import StrEnum, auto
from typing import ClassVar, Self

from ._arith import Operation


class NodeKind(StrEnum):
    """The kind of node in the computation graph."""

    INPUT = auto()  # Filled at evaluation time
    CONSTANT = auto()  # Fixed at construction
    COMPUTED = auto()  # Derived from two earlier nodes
    HINT = auto()  # Supplied externally, linked to another node


@dataclass(frozen=True, slots=True)
class NodeBase:
    """Fields and accessors shared by every node variant."""

    kind: ClassVar[NodeKind]

    id: int

    @property
    def inputs(self) -> tuple[int, int] | tuple[()]:
        """Indices of the nodes feeding this one: none, or exactly two."""
        return ()

    @property
    def operation(self) -> Operation | None:
        return None

    @property
    def output(self) -> int | None:
        return None

    @property
    def hint_link(self) -> int | None:
        return None

    def is_filled(self) -> bool:
        """Check whether this node currently has an output."""
        return self.output is not None


@dataclass(frozen=True, slots=True)
class InputNode(NodeBase):
    """A node whose value is supplied by ``fill_nodes``."""

    kind: ClassVar[NodeKind] = NodeKind.INPUT

    value: int | None = None

    @property
    def output(self) -> int | None:
        return self.value

    def with_output(self, value: int) -> Self:
        return replace(self, value=value)


@dataclass(frozen=True, slots=True)
class ConstantNode(NodeBase):
    """A node whose value is fixed when it is created."""

    kind: ClassVar[NodeKind] = NodeKind.CONSTANT

    value: int

    @property
    def output(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class ComputedNode(NodeBase):
    """A node computed from two earlier nodes.

    Attributes:
        op: The operation applied to the inputs.
        left: Index of the left operand (strictly smaller than ``id``).
        right: Index of the right operand (strictly smaller than ``id``).
        value: The last computed output, ``None`` until evaluated.

    """

    kind: ClassVar[NodeKind] = NodeKind.COMPUTED

    op: Operation
    left: int
    right: int
    value: int | None = None

    @property
    def inputs(self) -> tuple[int, int]:
        return (self.left, self.right)

    @property
    def operation(self) -> Operation:
        return self.op

    @property
    def output(self) -> int | None:
        return self.value

    def with_output(self, value: int) -> Self:
        return replace(self, value=value)


@dataclass(frozen=True, slots=True)
class HintNode(NodeBase):
    """An externally supplied value linked to the node it claims to relate to.

    The evaluator never recomputes a hint; ``assert_equal`` is the only place
    its claim is checked.
    """

    kind: ClassVar[NodeKind] = NodeKind.HINT

    value: int
    link: int

    @property
    def output(self) -> int:
        return self.value

    @property
    def hint_link(self) -> int:
        return self.link


type Node = InputNode | ConstantNode | ComputedNode | HintNode
