"""Graph builder: construction API, evaluation and validation entry points."""

import logging
from typing import Self

from ._arith import ArithmeticSettings, Operation
from ._errors import HintMismatchError, NotAHintError
from ._eval import ConstraintReport, check_constraints, collect_violations, fill_nodes
from ._node import ComputedNode, ConstantNode, HintNode, InputNode, Node, NodeKind
from ._store import NodeStore

logger = logging.getLogger(__name__)


class Builder:
    """Builds an arithmetic computation graph with hint nodes and evaluates it.

    Every construction method appends one node and returns its index. Nodes
    can only reference indices that already exist, so the construction order
    is always a valid evaluation order.

    Example:
        >>> b = Builder()
        >>> x = b.init()
        >>> seven = b.constant(7)
        >>> s = b.add(x, seven)
        >>> root = b.hint(4, s)
        >>> squared = b.multiply(root, root)
        >>> b.fill_nodes(x, 9)
        >>> b.check_constraints()
        True
        >>> b.assert_equal(root, squared)
        True

    """

    def __init__(self, settings: ArithmeticSettings | None = None) -> None:
        self.settings = settings if settings is not None else ArithmeticSettings()
        self._store = NodeStore()

    # Construction

    def init(self) -> int:
        """Add an input node, to be filled later by ``fill_nodes``."""
        return self._store.append(InputNode)

    def constant(self, value: int) -> int:
        """Add a node whose output is fixed to ``value``."""
        value = self.settings.validate_value(value)
        return self._store.append(lambda index: ConstantNode(index, value))

    def add(self, a: int, b: int) -> int:
        """Add a node computing ``a + b``."""
        return self._binary(Operation.ADD, a, b)

    def multiply(self, a: int, b: int) -> int:
        """Add a node computing ``a * b``."""
        return self._binary(Operation.MUL, a, b)

    mul = multiply

    def hint(self, value: int, dependent_index: int) -> int:
        """Add an externally computed value linked to ``dependent_index``.

        The hint is not checked here. Route it through computed nodes and
        call ``assert_equal`` once the graph is filled.
        """
        value = self.settings.validate_value(value)
        link = self._store.require(dependent_index)
        return self._store.append(lambda index: HintNode(index, value, link))

    def _binary(self, op: Operation, a: int, b: int) -> int:
        left = self._store.require(a)
        right = self._store.require(b)
        return self._store.append(lambda index: ComputedNode(index, op, left, right))

    # Evaluation and validation

    def fill_nodes(self, input_index: int, value: int) -> None:
        """Set ``input_index`` to ``value`` and recompute every computed node.

        Can be called repeatedly; each call overwrites the previous outputs.
        On failure the graph keeps the outputs it had before the call.
        """
        self._store = fill_nodes(self._store, self.settings, input_index, value)

    def check_constraints(self) -> bool:
        """Check that every computed node matches its operation and inputs.

        Raises:
            ConstraintViolationError: If any computed node does not match.
            UnsetOutputError: If the graph has not been filled.

        """
        return check_constraints(self._store, self.settings)

    def constraint_report(self) -> ConstraintReport:
        """Like ``check_constraints`` but returns mismatches instead of raising."""
        return collect_violations(self._store, self.settings)

    def assert_equal(self, hint_index: int, target_index: int) -> bool:
        """Assert that a hint, routed through the graph, reproduces its linked node.

        Args:
            hint_index: The hint node. Its link names the node whose output
                is expected.
            target_index: The node computed from the hint that should equal
                the linked node.

        Returns:
            True if the outputs are equal.

        Raises:
            NotAHintError: If ``hint_index`` is not a hint node.
            UnsetOutputError: If either output has not been filled.
            HintMismatchError: If the outputs differ.

        """
        hint = self._store.get(hint_index)
        if not isinstance(hint, HintNode):
            raise NotAHintError(hint_index, hint.kind)
        expected = self._store.output_of(hint.link)
        actual = self._store.output_of(target_index)
        if expected != actual:
            raise HintMismatchError(hint_index, hint.link, target_index, expected, actual)
        logger.debug("Hint %d holds: node %d == node %d == %d", hint_index, hint.link, target_index, actual)
        return True

    # Inspection

    def get_node(self, index: int) -> Node:
        """Get a snapshot of the node at ``index``.

        Raises:
            NodeIndexError: If ``index`` is not a valid node index.

        """
        return self._store.get(index)

    @property
    def nodes(self) -> tuple[Node, ...]:
        """Snapshot of every node, in index order."""
        return tuple(self._store)

    def nodes_of_kind(self, kind: NodeKind) -> list[Node]:
        return [node for node in self._store if node.kind == kind]

    def input_nodes(self) -> list[int]:
        """Indices of all input nodes."""
        return [node.id for node in self.nodes_of_kind(NodeKind.INPUT)]

    def hint_nodes(self) -> list[int]:
        """Indices of all hint nodes."""
        return [node.id for node in self.nodes_of_kind(NodeKind.HINT)]

    def copy(self) -> Self:
        """Return an independent builder with the same graph and outputs."""
        clone = type(self)(self.settings)
        clone._store = self._store.copy()  # noqa: SLF001
        return clone

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        nodes = ", ".join(repr(node) for node in self._store)
        return f"Builder(width={self.settings.width}, overflow={self.settings.overflow.value}, nodes=[{nodes}])"
