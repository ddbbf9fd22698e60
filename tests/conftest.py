"""Shared test fixtures for rowframe tests."""

import pytest

from rowframe import Column, Index, Table


@pytest.fixture
def letters_index():
    """Explicit index over three text labels."""
    return Index("letters", ["a", "b", "c"])


@pytest.fixture
def range_index():
    """Numeric index 0, 1, ..., 4."""
    return Index.numeric("", 0, 5, 1)


@pytest.fixture
def sample_table():
    """Two-column table over rows a, b, c."""
    rows = Index("", ["a", "b", "c"])
    return Table(
        rows,
        [
            Column("qty", rows, [1, 2, 3]),
            Column("item", rows, ["pen", "ink", "pad"]),
        ],
    )


@pytest.fixture
def table_text():
    """Text block of a two-column table with a named row index."""
    return "\n".join(
        [
            "#table[2, 2]",
            "#column[2, integer, a]",
            "#index[2, row]",
            "x y",
            "1 2",
            "#column[2, string, b]",
            "#index[2, row]",
            "x y",
            "3 oops",
        ]
    )
