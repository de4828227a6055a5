"""Tests for graph construction, inspection and hint assertions."""

import copy

import pytest

import hintgraph as hg
from hintgraph import (
    ArithmeticSettings,
    Builder,
    ComputedNode,
    ConstantNode,
    HintMismatchError,
    HintNode,
    InputNode,
    NodeIndexError,
    NodeKind,
    NotAHintError,
    Operation,
    UnsetOutputError,
    ValueOutOfRangeError,
)


class TestConstruction:
    def test_indices_follow_construction_order(self) -> None:
        b = Builder()
        x = b.init()
        five = b.constant(5)
        s = b.add(x, five)
        p = b.multiply(s, x)
        h = b.hint(3, p)
        assert [x, five, s, p, h] == [0, 1, 2, 3, 4]
        assert len(b) == 5

    def test_node_variants(self) -> None:
        b = Builder()
        x = b.init()
        five = b.constant(5)
        s = b.add(x, five)
        p = b.mul(s, s)
        h = b.hint(3, p)
        assert b.get_node(x) == InputNode(0)
        assert b.get_node(five) == ConstantNode(1, 5)
        assert b.get_node(s) == ComputedNode(2, Operation.ADD, 0, 1)
        assert b.get_node(p) == ComputedNode(3, Operation.MUL, 2, 2)
        assert b.get_node(h) == HintNode(4, 3, 3)

    def test_constants_and_hints_have_outputs_before_filling(self) -> None:
        b = Builder()
        x = b.init()
        seven = b.constant(7)
        s = b.add(x, seven)
        h = b.hint(4, s)
        assert b.get_node(x).output is None
        assert b.get_node(seven).output == 7
        assert b.get_node(s).output is None
        assert b.get_node(h).output == 4

    @pytest.mark.parametrize("bad", [2, 10, -1])
    def test_binary_rejects_missing_inputs(self, bad: int) -> None:
        b = Builder()
        x = b.init()
        b.constant(1)
        with pytest.raises(NodeIndexError):
            b.add(x, bad)
        with pytest.raises(NodeIndexError):
            b.multiply(bad, x)
        # Nothing was appended by the failed calls
        assert len(b) == 2

    def test_binary_cannot_reference_itself(self) -> None:
        b = Builder()
        x = b.init()
        with pytest.raises(NodeIndexError):
            b.add(x, 1)

    def test_hint_rejects_missing_link(self) -> None:
        b = Builder()
        b.init()
        with pytest.raises(NodeIndexError):
            b.hint(4, 1)
        assert len(b) == 1

    def test_constant_out_of_range(self) -> None:
        b = Builder(ArithmeticSettings(width=8))
        with pytest.raises(ValueOutOfRangeError):
            b.constant(256)
        with pytest.raises(ValueOutOfRangeError):
            b.constant(-1)

    def test_hint_out_of_range(self) -> None:
        b = Builder(ArithmeticSettings(width=8))
        x = b.init()
        with pytest.raises(ValueOutOfRangeError):
            b.hint(1000, x)


class TestGetNode:
    def test_out_of_range(self) -> None:
        b = Builder()
        b.init()
        with pytest.raises(NodeIndexError, match="Node index 1 is out of range"):
            b.get_node(1)

    def test_returns_snapshot(self) -> None:
        b = Builder()
        x = b.init()
        before = b.get_node(x)
        b.fill_nodes(x, 3)
        assert before.output is None
        assert b.get_node(x).output == 3


class TestInspection:
    def test_nodes_and_filters(self) -> None:
        b = Builder()
        x = b.init()
        y = b.init()
        s = b.add(x, y)
        h = b.hint(2, s)
        assert [node.id for node in b.nodes] == [0, 1, 2, 3]
        assert b.input_nodes() == [x, y]
        assert b.hint_nodes() == [h]
        assert [node.id for node in b.nodes_of_kind(NodeKind.COMPUTED)] == [s]

    def test_repr(self) -> None:
        b = Builder()
        x = b.init()
        b.add(x, b.constant(7))
        assert repr(b) == (
            "Builder(width=32, overflow=checked, nodes=["
            "InputNode(id=0, value=None), "
            "ConstantNode(id=1, value=7), "
            "ComputedNode(id=2, op=<Operation.ADD: 'add'>, left=0, right=1, value=None)])"
        )


class TestCopy:
    def test_copies_are_independent(self) -> None:
        b = Builder()
        x = b.init()
        doubled = b.add(x, x)

        clone = b.copy()
        clone.fill_nodes(x, 4)
        b.fill_nodes(x, 10)

        assert clone.get_node(doubled).output == 8
        assert b.get_node(doubled).output == 20

    def test_copy_keeps_settings(self) -> None:
        settings = ArithmeticSettings(width=16)
        b = Builder(settings)
        assert b.copy().settings == settings

    def test_copy_module_support(self) -> None:
        b = Builder()
        b.init()
        clone = copy.copy(b)
        clone.init()
        assert len(b) == 1
        assert len(clone) == 2


@pytest.fixture
def sqrt_graph() -> tuple[Builder, int, int, int]:
    """x + 7 with a square-root hint squared back inside the graph."""
    b = Builder()
    x = b.init()
    seven = b.constant(7)
    x_plus_seven = b.add(x, seven)
    root = b.hint(4, x_plus_seven)
    squared = b.multiply(root, root)
    return b, x, root, squared


class TestAssertEqual:
    def test_holds(self, sqrt_graph: tuple[Builder, int, int, int]) -> None:
        b, x, root, squared = sqrt_graph
        b.fill_nodes(x, 9)
        assert b.assert_equal(root, squared) is True

    def test_mismatch(self, sqrt_graph: tuple[Builder, int, int, int]) -> None:
        b, x, root, squared = sqrt_graph
        b.fill_nodes(x, 10)
        with pytest.raises(HintMismatchError) as exc_info:
            b.assert_equal(root, squared)
        err = exc_info.value
        assert err.hint_id == root
        assert err.link_id == 2
        assert err.target_id == squared
        assert err.expected == 17
        assert err.actual == 16
        assert "linked node 2 = 17" in str(err)

    def test_mismatch_is_a_constraint_violation(self, sqrt_graph: tuple[Builder, int, int, int]) -> None:
        b, x, root, squared = sqrt_graph
        b.fill_nodes(x, 10)
        with pytest.raises(hg.ConstraintViolationError):
            b.assert_equal(root, squared)

    def test_before_filling(self, sqrt_graph: tuple[Builder, int, int, int]) -> None:
        b, _x, root, squared = sqrt_graph
        with pytest.raises(UnsetOutputError):
            b.assert_equal(root, squared)

    def test_requires_hint_node(self, sqrt_graph: tuple[Builder, int, int, int]) -> None:
        b, x, _root, squared = sqrt_graph
        b.fill_nodes(x, 9)
        with pytest.raises(NotAHintError, match="Node 4 is a computed node"):
            b.assert_equal(squared, squared)

    def test_unknown_target(self, sqrt_graph: tuple[Builder, int, int, int]) -> None:
        b, x, root, _squared = sqrt_graph
        b.fill_nodes(x, 9)
        with pytest.raises(NodeIndexError):
            b.assert_equal(root, 42)

    def test_structural_errors_share_a_base(self, sqrt_graph: tuple[Builder, int, int, int]) -> None:
        b, _x, root, squared = sqrt_graph
        with pytest.raises(hg.StructuralError):
            b.assert_equal(root, squared)
