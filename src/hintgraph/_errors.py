"""Exception hierarchy for hintgraph.

Two families of failures are kept apart:

- StructuralError: the graph or the call is malformed (bad index, unfilled
  output, wrong node kind, unrepresentable value).
- ConstraintViolationError: the graph is well formed but its values are
  inconsistent (a computed node or a hint disagrees with its relation).

Neither family is ever downgraded to a warning by the library.
"""


class HintgraphError(Exception):
    """Base class for all hintgraph errors."""


class StructuralError(HintgraphError):
    """The graph was used in a way its structure does not allow."""


class NodeIndexError(StructuralError, IndexError):
    """A node index does not refer to an existing node."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Node index {index} is out of range (graph has {size} nodes)")


class UnsetOutputError(StructuralError):
    """The output of a node was read before it was filled."""

    def __init__(self, index: int, reader: int | None = None) -> None:
        self.index = index
        self.reader = reader
        if reader is None:
            msg = f"Output of node {index} has not been filled"
        else:
            msg = f"Node {reader} reads node {index}, whose output has not been filled"
        super().__init__(msg)


class NotAnInputError(StructuralError):
    """An evaluation targeted a node that is not an input node."""

    def __init__(self, index: int, kind: str) -> None:
        self.index = index
        self.kind = kind
        super().__init__(f"Node {index} is a {kind} node, only input nodes can be filled")


class NotAHintError(StructuralError):
    """A hint assertion was made against a node that is not a hint node."""

    def __init__(self, index: int, kind: str) -> None:
        self.index = index
        self.kind = kind
        super().__init__(f"Node {index} is a {kind} node, expected a hint node")


class ValueOutOfRangeError(StructuralError, ValueError):
    """A value cannot be represented with the configured integer width."""

    def __init__(self, value: object, width: int) -> None:
        self.value = value
        self.width = width
        super().__init__(f"Value {value!r} is not an unsigned {width}-bit integer")


class ConstraintViolationError(HintgraphError):
    """A computed node's output disagrees with its operation and inputs."""

    def __init__(self, node_id: int, expected: int, actual: int) -> None:
        self.node_id = node_id
        self.expected = expected
        self.actual = actual
        super().__init__(self._message())

    def _message(self) -> str:
        return f"Constraint violated at node {self.node_id}: expected {self.expected}, found {self.actual}"


class HintMismatchError(ConstraintViolationError):
    """A hint routed through the graph does not reproduce the node it is linked to."""

    def __init__(self, hint_id: int, link_id: int, target_id: int, expected: int, actual: int) -> None:
        self.hint_id = hint_id
        self.link_id = link_id
        self.target_id = target_id
        super().__init__(target_id, expected, actual)

    def _message(self) -> str:
        return (
            f"Hint {self.hint_id} does not hold: linked node {self.link_id} = {self.expected}, "
            f"but node {self.target_id} = {self.actual}"
        )


class ArithmeticOverflowError(HintgraphError, OverflowError):
    """An operation produced a value that does not fit the configured width."""

    def __init__(self, symbol: str, left: int, right: int, width: int, node_id: int | None = None) -> None:
        self.left = left
        self.right = right
        self.width = width
        self.node_id = node_id
        where = "" if node_id is None else f" at node {node_id}"
        super().__init__(f"{left} {symbol} {right} overflows an unsigned {width}-bit integer{where}")
