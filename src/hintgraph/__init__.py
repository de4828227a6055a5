"""Arithmetic computation graphs with externally supplied hint values."""

__all__ = [
    "ArithmeticOverflowError",
    "ArithmeticSettings",
    "Builder",
    "ComputedNode",
    "ConstantNode",
    "ConstraintReport",
    "ConstraintViolation",
    "ConstraintViolationError",
    "HintMismatchError",
    "HintNode",
    "HintgraphError",
    "InputNode",
    "Node",
    "NodeIndexError",
    "NodeKind",
    "NodeStore",
    "NotAHintError",
    "NotAnInputError",
    "Operation",
    "OverflowPolicy",
    "StructuralError",
    "UnsetOutputError",
    "ValueOutOfRangeError",
]

from ._arith import ArithmeticSettings, Operation, OverflowPolicy
from ._builder import Builder
from ._errors import (
    ArithmeticOverflowError,
    ConstraintViolationError,
    HintgraphError,
    HintMismatchError,
    NodeIndexError,
    NotAHintError,
    NotAnInputError,
    StructuralError,
    UnsetOutputError,
    ValueOutOfRangeError,
)
from ._eval import ConstraintReport, ConstraintViolation
from ._node import ComputedNode, ConstantNode, HintNode, InputNode, Node, NodeKind
from ._store import NodeStore
