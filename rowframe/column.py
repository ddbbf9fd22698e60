"""Named, indexed sequences of values.

A :class:`Column` pairs a name and an :class:`~rowframe.index.Index`
with one value per index label.  Columns are immutable: every operation
returns a new column.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import LengthMismatch, require
from .index import Index
from .labels import Label, label_key, value_key

V = TypeVar("V")
U = TypeVar("U")


@dataclass(frozen=True, eq=False)
class Column(Generic[V]):
    """An immutable column of values labelled by an index.

    Attributes
    ----------
    name : str
        Column name.  May be empty but never None.
    index : Index
        Row labels, one per value.
    values : tuple[V, ...]
        The values, copied at construction time.  ``None`` stands for an
        absent value.

    Raises
    ------
    NullArgument
        If ``name``, ``index`` or ``values`` is None.
    LengthMismatch
        If the index length differs from the number of values.
    """

    name: str
    index: Index
    values: Sequence[V]

    def __post_init__(self):
        """Validate and freeze the column contents."""
        require(self.name, "column name")
        require(self.index, "column index")
        values = tuple(require(self.values, "column values"))
        if self.index.length != len(values):
            raise LengthMismatch(
                f"Index length ({self.index.length}) and number of values "
                f"({len(values)}) must match"
            )
        object.__setattr__(self, "values", values)

    @property
    def size(self) -> int:
        """Number of values."""
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def items(self) -> Iterator[tuple[Label, V]]:
        """Iterate over ``(label, value)`` pairs in index order."""
        return zip(self.index, self.values)

    def value_at(self, label: Label) -> V | None:
        """Value stored under ``label``, or None if the label is absent."""
        position = self.index.position_of(label)
        if position is None:
            return None
        return self.values[position]

    def with_name(self, new_name: str) -> Column[V]:
        """Same index and values under a new name."""
        return Column(new_name, self.index, self.values)

    def with_index(self, new_index: Index) -> Column[V]:
        """Attach ``new_index`` to the existing values.

        When ``new_index`` does not have exactly one label per value it is
        ignored and the column falls back to a positional index
        ``0, 1, ..., size - 1`` instead of failing.
        """
        require(new_index, "new index")
        if new_index.length == self.size:
            return Column(self.name, new_index, self.values)
        return Column(self.name, Index.positional(self.size), self.values)

    def realign(self, new_index: Index) -> Column[V]:
        """Rebuild the column over ``new_index`` by label lookup.

        Every label of ``new_index`` receives the value this column holds
        for it, or None when it has none.  If this column's index repeats
        a label, the last occurrence wins.

        Parameters
        ----------
        new_index : Index
            Index of the resulting column.

        Returns
        -------
        Column
            A column whose index is exactly ``new_index``.
        """
        require(new_index, "new index")
        by_label: dict = {}
        for label, value in self.items():
            by_label[label_key(label)] = value
        realigned = [by_label.get(label_key(label)) for label in new_index]
        return Column(self.name, new_index, realigned)

    def stack(self, other: Column[V]) -> Column[V]:
        """Put ``other`` below this column.

        The index is ``self.index.fuse(other.index)`` while the values are
        the two value sequences appended by position.  When the indices
        share labels the fused index is shorter than the appended values
        and construction fails with :class:`~rowframe.errors.LengthMismatch`.
        """
        require(other, "other column")
        fused = self.index.fuse(other.index)
        return Column(self.name, fused, self.values + other.values)

    def map(self, f: Callable[[V], U]) -> Column[U]:
        """Apply ``f`` to every value, keeping name and index."""
        return Column(self.name, self.index, [f(value) for value in self.values])

    def __eq__(self, other: object) -> bool:
        """Same name, structurally equal index and values of the same kinds."""
        if not isinstance(other, Column):
            return NotImplemented
        return (
            self.name == other.name
            and self.index == other.index
            and self._value_keys() == other._value_keys()
        )

    def __hash__(self) -> int:
        return hash((self.name, self.index, self._value_keys()))

    def _value_keys(self) -> tuple:
        return tuple(value_key(value) for value in self.values)
