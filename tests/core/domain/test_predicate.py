"""
Tests for predicate trees, ColumnDescriptor and the exception hierarchy.
"""
import pytest
from unittest.mock import Mock

from tablefilter.core.domain import (
    And,
    ColumnDescriptor,
    ConfigurationError,
    Leaf,
    MATCH_ALL,
    MATCH_NONE,
    MissingColumnError,
    Not,
    Or,
    ParseError,
    RegexCompileError,
    TableFilterError,
    all_of,
    any_of,
)
from tablefilter.core.ports import SequenceRecord


def column_equals(index, expected):
    return Leaf(lambda record: record.value_at(index) == expected, f"#{index} = {expected}")


class TestLeaf:
    """Tests for terminal nodes."""

    def test_evaluates_function(self):
        leaf = column_equals(0, "a")
        assert leaf.evaluate(SequenceRecord(["a"]))
        assert not leaf.evaluate(SequenceRecord(["b"]))

    def test_callable(self):
        assert column_equals(0, 1)(SequenceRecord([1]))

    def test_missing_column_does_not_match(self):
        """A record without the column is excluded, not an error."""
        leaf = column_equals(5, "a")
        assert leaf.evaluate(SequenceRecord(["a"])) is False

    def test_other_errors_propagate(self):
        leaf = Leaf(lambda record: 1 / 0)
        with pytest.raises(ZeroDivisionError):
            leaf.evaluate(SequenceRecord([]))

    def test_result_is_boolean(self):
        leaf = Leaf(lambda record: record.value_at(0))
        assert leaf.evaluate(SequenceRecord([0])) is False
        assert leaf.evaluate(SequenceRecord(["x"])) is True

    def test_leaves_compare_by_identity(self):
        accept = Leaf(lambda record: True, "x")
        reject = Leaf(lambda record: False, "x")
        assert accept != reject
        assert accept == accept
        assert len({accept, reject}) == 2

    def test_trees_over_same_leaves_are_equal(self):
        first, second = column_equals(0, 1), column_equals(1, 2)
        assert And(first, second) == And(first, second)

    def test_constants(self):
        record = SequenceRecord([])
        assert MATCH_ALL.evaluate(record)
        assert not MATCH_NONE.evaluate(record)


class TestComposition:
    """Tests for And / Or / Not."""

    def test_and(self):
        predicate = And(column_equals(0, 1), column_equals(1, 2))
        assert predicate.evaluate(SequenceRecord([1, 2]))
        assert not predicate.evaluate(SequenceRecord([1, 3]))

    def test_or(self):
        predicate = Or(column_equals(0, 1), column_equals(1, 2))
        assert predicate.evaluate(SequenceRecord([0, 2]))
        assert not predicate.evaluate(SequenceRecord([0, 0]))

    def test_not(self):
        assert Not(column_equals(0, 1)).evaluate(SequenceRecord([2]))

    def test_operators(self):
        a, b = column_equals(0, 1), column_equals(1, 2)
        assert isinstance(a & b, And)
        assert isinstance(a | b, Or)
        assert isinstance(~a, Not)

    def test_and_short_circuits(self):
        spy = Mock(return_value=True)
        And(MATCH_NONE, Leaf(spy)).evaluate(SequenceRecord([]))
        spy.assert_not_called()

    def test_or_short_circuits(self):
        spy = Mock(return_value=True)
        Or(MATCH_ALL, Leaf(spy)).evaluate(SequenceRecord([]))
        spy.assert_not_called()

    def test_size_counts_nodes(self):
        tree = And(column_equals(0, 1), Not(column_equals(1, 2)))
        assert tree.size() == 4

    def test_str(self):
        tree = And(Leaf(lambda r: True, "a"), Leaf(lambda r: True, "b"))
        assert str(tree) == "(a AND b)"


class TestAllOf:
    """Tests for the AND / OR folds."""

    def test_empty_is_none(self):
        assert all_of([]) is None
        assert all_of([None, None]) is None

    def test_single_predicate_returned_as_is(self):
        leaf = column_equals(0, 1)
        assert all_of([None, leaf]) is leaf

    def test_left_deep(self):
        a, b, c = column_equals(0, 1), column_equals(1, 2), column_equals(2, 3)
        combined = all_of([a, None, b, c])
        assert combined == And(And(a, b), c)

    def test_combined_semantics(self):
        combined = all_of([column_equals(0, 1), column_equals(1, 2)])
        assert combined.evaluate(SequenceRecord([1, 2]))
        assert not combined.evaluate(SequenceRecord([1, 0]))

    def test_any_of(self):
        combined = any_of([column_equals(0, 1), None, column_equals(0, 2)])
        assert combined.evaluate(SequenceRecord([2]))
        assert not combined.evaluate(SequenceRecord([3]))


class TestColumnDescriptor:
    """Tests for ColumnDescriptor."""

    def test_defaults_to_string(self):
        column = ColumnDescriptor(0)
        assert column.semantic_type is str
        assert column.is_string

    def test_none_type_is_string(self):
        assert ColumnDescriptor(0, None).semantic_type is str

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            ColumnDescriptor(-1, int)

    def test_label(self):
        assert ColumnDescriptor(2, int, "age").label == "age"
        assert ColumnDescriptor(2, int).label == "#2"

    def test_immutable(self):
        column = ColumnDescriptor(0, int)
        with pytest.raises(Exception):
            column.index = 3


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(ParseError, TableFilterError)
        assert issubclass(RegexCompileError, ParseError)
        assert issubclass(MissingColumnError, LookupError)
        assert issubclass(ConfigurationError, TableFilterError)

    def test_parse_error_offset(self):
        error = ParseError("bad", 3)
        assert error.message == "bad"
        assert error.offset == 3

    def test_shifted_keeps_class(self):
        shifted = RegexCompileError("bad", 1).shifted(4)
        assert isinstance(shifted, RegexCompileError)
        assert shifted.offset == 5
        assert shifted.message == "bad"
