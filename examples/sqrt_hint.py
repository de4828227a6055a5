"""Prove knowledge of the square root of x + 7.

The square root is not an arithmetic operation of the graph, so it enters as
a hint linked to ``x + 7``. Squaring the hint inside the graph and asserting
it equals the linked node proves the hint was right.

    hintgraph check examples/sqrt_hint.py --value 9 --assert 3:4
"""

from hintgraph import Builder

builder = Builder()
x = builder.init()
seven = builder.constant(7)
x_plus_seven = builder.add(x, seven)
root = builder.hint(4, x_plus_seven)
squared = builder.multiply(root, root)

if __name__ == "__main__":
    builder.fill_nodes(x, 9)
    print(builder)  # noqa: T201
    print(builder.check_constraints(), builder.assert_equal(root, squared))  # noqa: T201
