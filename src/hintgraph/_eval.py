"""Evaluation and constraint checking over a node store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._errors import ConstraintViolationError, NotAnInputError, UnsetOutputError
from ._node import ComputedNode, InputNode

if TYPE_CHECKING:
    from ._arith import ArithmeticSettings, Operation
    from ._store import NodeStore

logger = logging.getLogger(__name__)


def fill_nodes(store: NodeStore, settings: ArithmeticSettings, input_index: int, value: int) -> NodeStore:
    """Fill one input node and propagate values through the graph.

    Nodes are visited in index order, which is a topological order because
    every computed node only references earlier indices. Input, constant and
    hint nodes are left as they are, except the designated input.

    The input store is not modified. The caller adopts the returned store, so
    a failure part way through never leaves a partially filled graph behind.

    Args:
        store: The graph to evaluate.
        settings: Integer width and overflow policy.
        input_index: The input node receiving ``value``.
        value: The concrete input value.

    Returns:
        A new store with the input and every computed node filled.

    Raises:
        NodeIndexError: If ``input_index`` does not exist.
        NotAnInputError: If ``input_index`` is not an input node.
        ValueOutOfRangeError: If ``value`` does not fit the width.
        UnsetOutputError: If a computed node reads a node that has no output.
        ArithmeticOverflowError: If a result overflows under the checked policy.

    """
    target = store.get(input_index)
    if not isinstance(target, InputNode):
        raise NotAnInputError(input_index, target.kind)
    settings.validate_value(value)

    filled = store.copy()
    filled.replace(target.with_output(value))
    logger.debug("Filling node %d with %d (%d nodes)", input_index, value, len(filled))

    for node in filled:
        if not isinstance(node, ComputedNode):
            continue
        left = filled.output_of(node.left, reader=node.id)
        right = filled.output_of(node.right, reader=node.id)
        result = settings.apply(node.op, left, right, node_id=node.id)
        logger.debug("  Node %d = %d %s %d = %d", node.id, left, node.op.symbol, right, result)
        filled.replace(node.with_output(result))

    return filled


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    """A computed node whose stored output disagrees with its inputs."""

    node_id: int
    operation: Operation
    left: int
    right: int
    expected: int
    actual: int

    def to_error(self) -> ConstraintViolationError:
        return ConstraintViolationError(self.node_id, self.expected, self.actual)

    def __str__(self) -> str:
        return (
            f"node {self.node_id}: {self.left} {self.operation.symbol} {self.right} = {self.expected}, "
            f"found {self.actual}"
        )


@dataclass(frozen=True, slots=True)
class ConstraintReport:
    """Result of re-checking every computed node of a filled graph.

    Attributes:
        violations: Every computed node whose output does not match.
        checked: Number of computed nodes that were checked.

    """

    violations: tuple[ConstraintViolation, ...] = field(default_factory=tuple)
    checked: int = 0

    @property
    def success(self) -> bool:
        """Check if every constraint holds."""
        return len(self.violations) == 0

    def raise_for_violations(self) -> None:
        """Raise ConstraintViolationError for the first violation, if any."""
        if self.violations:
            raise self.violations[0].to_error()


def collect_violations(store: NodeStore, settings: ArithmeticSettings) -> ConstraintReport:
    """Recompute every computed node and collect mismatches.

    Mismatches are returned, not raised. Structural misuse (checking a graph
    that was never filled) still raises.

    Raises:
        UnsetOutputError: If a computed node or one of its inputs has no output.
        ArithmeticOverflowError: If recomputation overflows under the checked policy.

    """
    violations: list[ConstraintViolation] = []
    checked = 0

    for node in store:
        if not isinstance(node, ComputedNode):
            continue
        if node.value is None:
            raise UnsetOutputError(node.id)
        left = store.output_of(node.left, reader=node.id)
        right = store.output_of(node.right, reader=node.id)
        expected = settings.apply(node.op, left, right, node_id=node.id)
        checked += 1
        if expected != node.value:
            violation = ConstraintViolation(
                node_id=node.id,
                operation=node.op,
                left=left,
                right=right,
                expected=expected,
                actual=node.value,
            )
            logger.debug("Constraint violated at %s", violation)
            violations.append(violation)

    return ConstraintReport(violations=tuple(violations), checked=checked)


def check_constraints(store: NodeStore, settings: ArithmeticSettings) -> bool:
    """Check that every computed node is consistent with its inputs.

    Returns:
        True when every constraint holds.

    Raises:
        ConstraintViolationError: For the first computed node that does not match.

    """
    report = collect_violations(store, settings)
    report.raise_for_violations()
    return True
