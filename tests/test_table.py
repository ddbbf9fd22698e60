"""Tests for tables."""

import pytest

from rowframe import (
    Column,
    DuplicateColumnName,
    InconsistentIndex,
    Index,
    IndexMismatch,
    LengthMismatch,
    NullArgument,
    Table,
    UnknownColumn,
)
from rowframe.table import integer_total, resolve_column_name


def make_table(rows, **columns):
    """Build a table over ``rows`` from keyword columns."""
    index = Index("", rows)
    return Table(index, [Column(name, index, values) for name, values in columns.items()])


class TestConstruction:
    """Test table construction, naming and validation."""

    def test_accessors(self, sample_table):
        """Test basic properties."""
        assert sample_table.header_names == ("qty", "item")
        assert sample_table.column_count == 2
        assert sample_table.row_count == 3
        assert len(sample_table) == 3
        assert list(sample_table) == ["qty", "item"]
        assert "qty" in sample_table
        assert "price" not in sample_table
        assert sample_table.row_index.labels() == ("a", "b", "c")

    def test_default_names(self):
        """Test that unnamed columns are named after their position."""
        rows = Index("", [0, 1])
        table = Table(rows, [Column("", rows, [1, 2]), Column("  ", rows, [3, 4])])
        assert table.header_names == ("Column_0", "Column_1")
        assert table["Column_1"].name == "Column_1"

    def test_placeholder_name_is_replaced(self):
        """Test that the text format placeholder gets a default name."""
        rows = Index("", [0])
        table = Table(rows, [Column("x", rows, [1]), Column("Unnamed", rows, [2])])
        assert table.header_names == ("x", "Column_1")

    def test_default_name_collision(self):
        """Test that a default name can collide with an explicit one."""
        rows = Index("", [0])
        columns = [
            Column("Column_1", rows, [1]),
            Column("", rows, [2]),
            Column("z", rows, [3]),
        ]
        with pytest.raises(DuplicateColumnName, match="Column_1"):
            Table(rows, columns)

    def test_duplicate_names(self):
        """Test that two columns cannot share a name."""
        rows = Index("", [0])
        with pytest.raises(DuplicateColumnName):
            Table(rows, [Column("a", rows, [1]), Column("a", rows, [2])])

    def test_index_mismatch(self):
        """Test that every column must use the row index."""
        rows = Index("", ["a", "b"])
        other = Index("", ["a", "c"])
        with pytest.raises(IndexMismatch):
            Table(rows, [Column("x", other, [1, 2])])

    def test_structurally_equal_index_accepted(self):
        """Test that a different representation of the same labels is fine."""
        table = Table(Index.numeric("", 0, 2), [Column("x", Index("", [0, 1]), [5, 6])])
        assert table.cell_value(1, "x") == 6

    def test_null_arguments(self):
        """Test that the row index, column list and columns are required."""
        rows = Index("", [0])
        with pytest.raises(NullArgument):
            Table(None, [])
        with pytest.raises(NullArgument):
            Table(rows, None)
        with pytest.raises(NullArgument):
            Table(rows, [None])

    def test_empty_table(self):
        """Test a table without columns."""
        table = Table(Index("", []), [])
        assert table.column_count == 0
        assert table.row_count == 0

    def test_resolve_column_name(self):
        """Test the default naming rule directly."""
        assert resolve_column_name(None, 3) == "Column_3"
        assert resolve_column_name("", 0) == "Column_0"
        assert resolve_column_name("price", 0) == "price"


class TestLookup:
    """Test cell and column lookup."""

    def test_cell_value(self, sample_table):
        """Test present and missing rows."""
        assert sample_table.cell_value("b", "item") == "ink"
        assert sample_table.cell_value("z", "item") is None

    def test_unknown_column(self, sample_table):
        """Test that an unknown column name fails."""
        with pytest.raises(UnknownColumn, match="Column not found: price"):
            sample_table.cell_value("a", "price")
        with pytest.raises(KeyError):
            sample_table["price"]

    def test_column_by_name(self, sample_table):
        """Test the non-raising lookup."""
        assert sample_table.column_by_name("qty").values == (1, 2, 3)
        assert sample_table.column_by_name("price") is None


class TestStackAndJuxtapose:
    """Test combining tables."""

    def test_stack(self):
        """Test stacking tables with different columns."""
        top = make_table(["a", "b"], X=[1, 2])
        bottom = make_table(["c"], Y=[9])
        stacked = top.stack(bottom)
        assert stacked.row_index.labels() == ("a", "b", "c")
        assert stacked.header_names == ("X", "Y")
        assert stacked["X"].values == (1, 2, None)
        assert stacked["Y"].values == (None, None, 9)

    def test_stack_shared_column(self):
        """Test that a shared column continues below."""
        top = make_table(["a"], X=[1], Y=["p"])
        bottom = make_table(["b", "c"], Y=["q", "r"])
        stacked = top.stack(bottom)
        assert stacked["Y"].values == ("p", "q", "r")
        assert stacked["X"].values == (1, None, None)

    def test_stack_overlapping_rows(self):
        """Test that shared row labels cannot be stacked."""
        top = make_table(["a", "b"], X=[1, 2])
        bottom = make_table(["b"], X=[3])
        with pytest.raises(LengthMismatch):
            top.stack(bottom)

    def test_juxtapose(self):
        """Test joining tables by row label."""
        left = make_table(["a", "b"], X=[1, 2])
        right = make_table(["b", "c"], Y=[20, 30])
        joined = left.juxtapose(right)
        assert joined.row_index.labels() == ("a", "b", "c")
        assert joined.header_names == ("X", "Y")
        assert joined["X"].values == (1, 2, None)
        assert joined["Y"].values == (None, 20, 30)

    def test_juxtapose_shared_name(self):
        """Test that juxtaposed tables must not share a column name."""
        left = make_table(["a"], X=[1])
        right = make_table(["b"], X=[2])
        with pytest.raises(DuplicateColumnName):
            left.juxtapose(right)


class TestReshaping:
    """Test replacing the row index and headers."""

    def test_with_row_index(self, sample_table):
        """Test that every column adopts the new row index."""
        new_rows = Index.numeric("", 10, 13)
        moved = sample_table.with_row_index(new_rows)
        assert moved.row_index == new_rows
        assert moved["qty"].index == new_rows
        assert moved.cell_value(12, "item") == "pad"

    def test_with_row_index_wrong_length(self, sample_table):
        """Test that the new row index needs one label per row."""
        with pytest.raises(LengthMismatch):
            sample_table.with_row_index(Index("", ["x"]))

    def test_with_headers(self, sample_table):
        """Test renaming by position."""
        renamed = sample_table.with_headers(Index.from_strings("count", "what"))
        assert renamed.header_names == ("count", "what")
        assert renamed.cell_value("a", "what") == "pen"

    def test_with_headers_from_numbers(self, sample_table):
        """Test that non-text labels are turned into names."""
        renamed = sample_table.with_headers(Index("", [1, 2.5]))
        assert renamed.header_names == ("1", "2.5")

    def test_with_headers_wrong_length(self, sample_table):
        """Test that the headers need one label per column."""
        with pytest.raises(LengthMismatch):
            sample_table.with_headers(Index("", ["only"]))

    def test_rename_column(self, sample_table):
        """Test renaming a single column."""
        renamed = sample_table.rename_column("qty", "count")
        assert renamed.header_names == ("count", "item")
        with pytest.raises(UnknownColumn):
            sample_table.rename_column("price", "cost")
        with pytest.raises(DuplicateColumnName):
            sample_table.rename_column("qty", "item")


class TestMapping:
    """Test cell and column transformations."""

    def test_map(self, sample_table):
        """Test applying a function to every cell."""
        mapped = sample_table.map(str)
        assert mapped["qty"].values == ("1", "2", "3")
        assert mapped.row_index == sample_table.row_index

    def test_map_columns(self, sample_table):
        """Test transforming every column onto a common index."""
        target = Index("", ["c", "a"])
        mapped = sample_table.map_columns(lambda column: column.realign(target))
        assert mapped.row_index == target
        assert mapped.header_names == ("qty", "item")
        assert mapped["item"].values == ("pad", "pen")

    def test_map_columns_keeps_names(self, sample_table):
        """Test that results are named after their source column."""
        mapped = sample_table.map_columns(lambda column: column.with_name("same"))
        assert mapped.header_names == ("qty", "item")

    def test_map_columns_inconsistent(self, sample_table):
        """Test that transformed columns must share one index."""

        def transform(column):
            if column.name == "qty":
                return column.realign(Index("", ["a"]))
            return column

        with pytest.raises(InconsistentIndex):
            sample_table.map_columns(transform)

    def test_map_columns_empty(self):
        """Test mapping a table without columns."""
        mapped = Table(Index("", ["a"]), []).map_columns(lambda column: column)
        assert mapped.column_count == 0
        assert mapped.row_count == 0


class TestAggregateSum:
    """Test the integer totals of a table."""

    def test_mixed_values(self):
        """Test that non-integer text is skipped."""
        table = make_table([0, 1, 2, 3], v=[1, "2", "x", "3"])
        totals = table.aggregate_sum()
        assert totals.row_index == Index("", [0])
        assert totals.cell_value(0, "v") == 6

    def test_every_column(self, sample_table):
        """Test that each column gets its own total."""
        totals = sample_table.aggregate_sum()
        assert totals.header_names == ("qty", "item")
        assert totals["qty"].values == (6,)
        assert totals["item"].values == (0,)

    def test_integer_total(self):
        """Test truncation and skipped kinds."""
        assert integer_total([2.7, -1.5, True, None, " 4 ", float("nan")]) == 5
        assert integer_total([2**62, 2**62, 2**62]) == 3 * 2**62
        assert integer_total([]) == 0


class TestEquality:
    """Test table comparison."""

    def test_equal(self, sample_table):
        """Test structurally equal tables."""
        rows = Index.numeric("", 0, 3)
        a = Table(rows, [Column("x", rows, [1, 2, 3])])
        b = make_table([0, 1, 2], x=[1, 2, 3])
        assert a == b
        assert a != sample_table

    def test_cell_kinds_matter(self):
        """Test that tables differing only in value kinds are not equal."""
        assert make_table([0], x=[1]) != make_table([0], x=[True])
        assert make_table([0], x=[1]) == make_table([0], x=[1])

    def test_unhashable(self, sample_table):
        """Test that tables cannot be used as dict keys."""
        with pytest.raises(TypeError):
            hash(sample_table)
