"""Prove that (a + 1) / 8 == 1 without a division operation.

The quotient is supplied as a hint linked to ``a + 1``; multiplying it back
by 8 must reproduce the linked node.

    hintgraph check examples/division_hint.py --value 7 --assert 3:5
"""

from hintgraph import Builder

builder = Builder()
a = builder.init()
one = builder.constant(1)
a_plus_one = builder.add(a, one)
quotient = builder.hint(1, a_plus_one)
eight = builder.constant(8)
product = builder.multiply(quotient, eight)
