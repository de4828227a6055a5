"""Fixed-width unsigned arithmetic used by the evaluator and the checker."""

import logging
from enum import StrEnum
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict

from ._errors import ArithmeticOverflowError, ValueOutOfRangeError

logger = logging.getLogger(__name__)


class Operation(StrEnum):
    """Binary operation of a computed node."""

    ADD = ("add", "+", "Sum of the two inputs.")
    MUL = ("mul", "*", "Product of the two inputs.")

    symbol: str

    def __new__(cls, value: str, symbol: str, doc: str = "") -> Self:
        """Create a new member carrying its infix symbol and a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.symbol = symbol
        obj.__doc__ = doc
        return obj

    def compute(self, left: int, right: int) -> int:
        """Apply the operation with unbounded Python integers."""
        match self:
            case Operation.ADD:
                return left + right
            case Operation.MUL:
                return left * right


class OverflowPolicy(StrEnum):
    """What happens when a result does not fit the configured width."""

    CHECKED = "checked"  # raise ArithmeticOverflowError
    WRAPPING = "wrapping"  # reduce modulo 2**width


class ArithmeticSettings(BaseModel):
    """Integer width and overflow policy of a graph.

    The default matches unsigned 32-bit values with overflow treated as a
    fatal error. ``WRAPPING`` gives modular arithmetic modulo ``2**width``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    width: Literal[8, 16, 32, 64] = 32
    overflow: OverflowPolicy = OverflowPolicy.CHECKED

    @property
    def max_value(self) -> int:
        """Largest representable value."""
        return (1 << self.width) - 1

    def validate_value(self, value: object) -> int:
        """Check that ``value`` is an unsigned integer that fits the width.

        Raises:
            ValueOutOfRangeError: If the value is not an int, is a bool,
                is negative, or exceeds ``max_value``.

        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueOutOfRangeError(value, self.width)
        if value < 0 or value > self.max_value:
            raise ValueOutOfRangeError(value, self.width)
        return value

    def apply(self, operation: Operation, left: int, right: int, *, node_id: int | None = None) -> int:
        """Apply ``operation`` under this width and overflow policy.

        Raises:
            ArithmeticOverflowError: If the result overflows under ``CHECKED``.

        """
        result = operation.compute(left, right)
        if result <= self.max_value:
            return result
        if self.overflow is OverflowPolicy.WRAPPING:
            wrapped = result & self.max_value
            logger.debug("Wrapped %d %s %d to %d (node %s)", left, operation.symbol, right, wrapped, node_id)
            return wrapped
        raise ArithmeticOverflowError(operation.symbol, left, right, self.width, node_id)
