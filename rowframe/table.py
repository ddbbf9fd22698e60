"""Tables: uniquely named columns over a shared row index.

A :class:`Table` is the two dimensional structure of rowframe.  Its
cells are addressed by a row label and a column name; every column
carries an index structurally equal to the table's row index.  Like
indices and columns, tables are immutable.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

import numpy as np

from .column import Column
from .errors import (
    DuplicateColumnName,
    InconsistentIndex,
    IndexMismatch,
    LengthMismatch,
    UnknownColumn,
    require,
)
from .index import Index
from .labels import Label, format_label, parse_integer

logger = logging.getLogger(__name__)

V = TypeVar("V")
U = TypeVar("U")

PLACEHOLDER_NAME = "Unnamed"
"""Column name the text format assigns to columns it was given no name for."""

DEFAULT_NAME_PREFIX = "Column_"


def resolve_column_name(name: str | None, position: int) -> str:
    """Name a column will carry inside a table.

    Missing, blank and placeholder names are replaced by
    ``Column_<position>``, where ``position`` is the column's place in
    the list the table was built from.
    """
    if name is None or not name.strip() or name == PLACEHOLDER_NAME:
        return f"{DEFAULT_NAME_PREFIX}{position}"
    return name


def integer_total(values: Iterable[Any]) -> int:
    """Sum the values of a column as integers.

    Integers are added as they are and finite floats are truncated
    toward zero.  Any other value is added when its text form is an
    integer; everything else (booleans, absent values, free text,
    timestamps) is skipped.

    Parameters
    ----------
    values : Iterable[Any]
        Column values.

    Returns
    -------
    int
        The total of the values that could be read as integers.
    """
    total = 0
    skipped = 0
    for value in values:
        if value is None or isinstance(value, (bool, np.bool_)):
            skipped += 1
        elif isinstance(value, numbers.Integral):
            total += int(value)
        elif isinstance(value, numbers.Real):
            if math.isfinite(value):
                total += int(value)
            else:
                skipped += 1
        else:
            parsed = parse_integer(str(value))
            if parsed is None:
                skipped += 1
            else:
                total += parsed
    if skipped:
        logger.debug("Skipped %d values that are not integers", skipped)
    return total


class Table(Generic[V]):
    """An immutable table of named columns sharing one row index.

    Parameters
    ----------
    row_index : Index
        Labels of the rows.
    columns : Iterable[Column]
        The columns, in order.  Each column's index must equal
        ``row_index``.  Columns without a usable name are named
        ``Column_<i>`` after their position ``i`` in this list.

    Raises
    ------
    NullArgument
        If ``row_index``, ``columns`` or one of the columns is None.
    IndexMismatch
        If a column's index differs from ``row_index``.
    DuplicateColumnName
        If two columns resolve to the same name.
    """

    def __init__(self, row_index: Index, columns: Iterable[Column[V]]) -> None:
        require(row_index, "row index")
        require(columns, "column list")
        resolved: dict[str, Column[V]] = {}
        for position, column in enumerate(columns):
            require(column, f"column at position {position}")
            if column.index != row_index:
                raise IndexMismatch(
                    f"Column {column.name!r} does not share the table's row index"
                )
            name = resolve_column_name(column.name, position)
            if name in resolved:
                raise DuplicateColumnName(f"Duplicate column name: {name}")
            resolved[name] = column if column.name == name else column.with_name(name)
        self._row_index = row_index
        self._columns = resolved

    @property
    def row_index(self) -> Index:
        """The row index."""
        return self._row_index

    @property
    def header_names(self) -> tuple[str, ...]:
        """Column names in insertion order."""
        return tuple(self._columns)

    @property
    def columns(self) -> tuple[Column[V], ...]:
        """The columns in insertion order."""
        return tuple(self._columns.values())

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return self._row_index.length

    def __len__(self) -> int:
        return self._row_index.length

    def column_by_name(self, name: str) -> Column[V] | None:
        """Column called ``name``, or None if there is none."""
        return self._columns.get(name)

    def __getitem__(self, name: str) -> Column[V]:
        column = self._columns.get(name)
        if column is None:
            raise UnknownColumn(f"Column not found: {name}")
        return column

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def cell_value(self, row_label: Label, column_name: str) -> V | None:
        """Value at ``(row_label, column_name)``.

        Raises
        ------
        UnknownColumn
            If the table has no column called ``column_name``.
        """
        return self[column_name].value_at(row_label)

    def map(self, f: Callable[[V], U]) -> Table[U]:
        """Apply ``f`` to every cell, keeping the row index."""
        return Table(self._row_index, [column.map(f) for column in self.columns])

    def map_columns(self, transform: Callable[[Column[V]], Column[U]]) -> Table[U]:
        """Apply ``transform`` to every column.

        Each result keeps the name of the column it came from.  All
        results must share a single index, which becomes the row index
        of the new table.

        Parameters
        ----------
        transform : Callable[[Column], Column]
            Column transformation.

        Returns
        -------
        Table
            The transformed table.  A table without columns maps to an
            empty table over an empty index.

        Raises
        ------
        InconsistentIndex
            If two transformed columns have different indices.
        """
        if not self._columns:
            return Table(Index("", []), [])
        transformed: list[Column[U]] = []
        new_index: Index | None = None
        for name, column in self._columns.items():
            result = transform(column).with_name(name)
            if new_index is None:
                new_index = result.index
            elif result.index != new_index:
                raise InconsistentIndex(
                    "Column transformation must produce columns with the same index"
                )
            transformed.append(result)
        return Table(new_index, transformed)

    def stack(self, other: Table[V]) -> Table[V]:
        """Put the rows of ``other`` below the rows of this table.

        The row index is ``self.row_index.fuse(other.row_index)``.  The
        columns are the union of both headers, this table's first.  A
        column missing from one side contributes absent values for that
        side's rows, and the two sides are appended by position.
        """
        require(other, "other table")
        fused = self._row_index.fuse(other.row_index)
        names = dict.fromkeys([*self._columns, *other._columns])
        stacked = []
        for name in names:
            top = self._columns.get(name)
            bottom = other._columns.get(name)
            top_values = top.values if top is not None else (None,) * self.row_count
            bottom_values = (
                bottom.values if bottom is not None else (None,) * other.row_count
            )
            stacked.append(Column(name, fused, top_values + bottom_values))
        return Table(fused, stacked)

    def juxtapose(self, other: Table[V]) -> Table[V]:
        """Place the columns of ``other`` to the right of this table's.

        Both tables' columns are realigned onto the fused row index, so
        rows are matched by label and missing cells are None.

        Raises
        ------
        DuplicateColumnName
            If the two tables share a column name.
        """
        require(other, "other table")
        fused = self._row_index.fuse(other.row_index)
        combined = {name: col.realign(fused) for name, col in self._columns.items()}
        for name, column in other._columns.items():
            if name in combined:
                raise DuplicateColumnName(
                    f"Tables to juxtapose share a column name: {name}"
                )
            combined[name] = column.realign(fused)
        return Table(fused, list(combined.values()))

    def with_row_index(self, new_index: Index) -> Table[V]:
        """Same columns over ``new_index``.

        Raises
        ------
        LengthMismatch
            If ``new_index`` does not have one label per row.
        """
        require(new_index, "new row index")
        if new_index.length != self.row_count:
            raise LengthMismatch(
                f"New row index has {new_index.length} labels, table has "
                f"{self.row_count} rows"
            )
        return Table(
            new_index,
            [Column(col.name, new_index, col.values) for col in self.columns],
        )

    def with_headers(self, new_names: Index) -> Table[V]:
        """Rename the columns by position after the labels of ``new_names``.

        Raises
        ------
        LengthMismatch
            If ``new_names`` does not have one label per column.
        """
        require(new_names, "new headers")
        if new_names.length != self.column_count:
            raise LengthMismatch(
                f"Got {new_names.length} headers for {self.column_count} columns"
            )
        renamed = [
            col.with_name(format_label(label))
            for label, col in zip(new_names, self.columns)
        ]
        return Table(self._row_index, renamed)

    def rename_column(self, old_name: str, new_name: str) -> Table[V]:
        """Rename a single column, keeping its position.

        Raises
        ------
        UnknownColumn
            If there is no column called ``old_name``.
        DuplicateColumnName
            If another column is already called ``new_name``.
        """
        target = self[old_name]
        if new_name != old_name and new_name in self._columns:
            raise DuplicateColumnName(f"Duplicate column name: {new_name}")
        return Table(
            self._row_index,
            [
                target.with_name(new_name) if name == old_name else column
                for name, column in self._columns.items()
            ],
        )

    def aggregate_sum(self) -> Table[int]:
        """One-row table holding the integer total of every column.

        See :func:`integer_total` for which values count.  The result has
        the same column names and the single row label ``0``.
        """
        total_index = Index.numeric("", 0, 1)
        return self.map_columns(
            lambda column: Column(column.name, total_index, [integer_total(column.values)])
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return (
            self._row_index == other._row_index
            and self.header_names == other.header_names
            and self.columns == other.columns
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Table(rows={self.row_count}, columns={list(self._columns)!r}, "
            f"row_index={self._row_index!r})"
        )
