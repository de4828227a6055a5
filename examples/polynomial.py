"""y = x^2 + 5 + x over unsigned 16-bit integers with wrapping arithmetic.

    hintgraph check examples/polynomial.py --value 6
"""

from hintgraph import ArithmeticSettings, Builder, OverflowPolicy

builder = Builder(ArithmeticSettings(width=16, overflow=OverflowPolicy.WRAPPING))
x = builder.init()
x_squared = builder.multiply(x, x)
five = builder.constant(5)
x_squared_plus_five = builder.add(x_squared, five)
y = builder.add(x_squared_plus_five, x)
