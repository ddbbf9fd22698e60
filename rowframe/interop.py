"""Conversion between rowframe objects and pandas.

Numeric indices map to :class:`pandas.RangeIndex` and back, so large
ranges cross the boundary without being materialized.  Every other
index becomes an object-dtype :class:`pandas.Index`.  Labels coming from
pandas are normalized to builtin Python scalars.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from .column import Column
from .errors import require
from .index import Index, NumericRange
from .table import Table


def index_to_pandas(index: Index) -> pd.Index:
    """Convert an :class:`Index` to a pandas index carrying the same labels."""
    require(index, "index")
    name = index.name or None
    rep = index.representation
    if isinstance(rep, NumericRange):
        return pd.RangeIndex(rep.start, rep.end, rep.step, name=name)
    return pd.Index(list(index.labels()), dtype=object, name=name)


def index_from_pandas(pd_index: pd.Index) -> Index:
    """Convert a pandas index, keeping ranges lazy."""
    require(pd_index, "pandas index")
    name = "" if pd_index.name is None else str(pd_index.name)
    if isinstance(pd_index, pd.RangeIndex):
        return Index.numeric(name, pd_index.start, pd_index.stop, pd_index.step)
    return Index(name, pd_index.tolist())


def column_to_series(column: Column[Any]) -> pd.Series:
    """Convert a column to a :class:`pandas.Series` named after it."""
    require(column, "column")
    return pd.Series(
        list(column.values),
        index=index_to_pandas(column.index),
        name=column.name,
        dtype=object,
    )


def column_from_series(series: pd.Series) -> Column[Any]:
    """Convert a series; its index becomes the column index."""
    require(series, "series")
    name = "" if series.name is None else str(series.name)
    return Column(name, index_from_pandas(series.index), series.tolist())


def table_to_frame(table: Table[Any]) -> pd.DataFrame:
    """Convert a table to a :class:`pandas.DataFrame` with object columns."""
    require(table, "table")
    return pd.DataFrame(
        {name: list(table[name].values) for name in table.header_names},
        index=index_to_pandas(table.row_index),
        columns=list(table.header_names),
        dtype=object,
    )


def table_from_frame(frame: pd.DataFrame) -> Table[Any]:
    """Convert a DataFrame; column labels are turned into strings.

    Raises
    ------
    DuplicateColumnName
        If two DataFrame columns resolve to the same name.
    """
    require(frame, "data frame")
    row_index = index_from_pandas(frame.index)
    columns = [
        Column(str(label), row_index, frame.iloc[:, position].tolist())
        for position, label in enumerate(frame.columns)
    ]
    return Table(row_index, columns)
