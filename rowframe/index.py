"""Immutable row indices.

An :class:`Index` is an ordered, length-bearing sequence of labels.  It
has one of three representations:

* :class:`ExplicitLabels` -- a stored tuple of labels,
* :class:`NumericRange` -- an arithmetic progression described by
  ``start``, ``end`` (exclusive) and ``step``, never materialized,
* :class:`FusedPair` -- the lazy concatenation of two indices produced
  by :meth:`Index.fuse`.

Whatever the representation, two indices are equal when they hold the
same labels in the same order, so callers never need to know which
representation they are holding.  Only :meth:`Index.labels` (and
hashing) costs time and memory proportional to the length.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union

from .errors import IndexOutOfRange, InvalidStep, require
from .labels import (
    Label,
    integral_value,
    label_key,
    normalize_label,
    parse_label,
)

logger = logging.getLogger(__name__)


def numeric_length(start: int, end: int, step: int) -> int:
    """Number of labels in the half-open progression ``start, start+step, ...``.

    Parameters
    ----------
    start : int
        First label (inclusive).
    end : int
        Bound (exclusive).
    step : int
        Non-zero increment; negative steps count down towards ``end``.

    Returns
    -------
    int
        The length, possibly 0.
    """
    if step > 0:
        if start >= end:
            return 0
        return (end - 1 - start) // step + 1
    if start <= end:
        return 0
    return (start - 1 - end) // (-step) + 1


@dataclass(frozen=True)
class ExplicitLabels:
    """Representation storing every label."""

    labels: tuple

    @property
    def length(self) -> int:
        return len(self.labels)

    def label_at(self, position: int) -> Label:
        return self.labels[position]

    def position_of(self, label: Label) -> int | None:
        target = label_key(label)
        for position, candidate in enumerate(self.labels):
            if label_key(candidate) == target:
                return position
        return None

    def last_labels(self, n: int) -> tuple:
        return self.labels[len(self.labels) - n :]

    def iter_labels(self) -> Iterator[Label]:
        return iter(self.labels)


@dataclass(frozen=True)
class NumericRange:
    """Representation of an arithmetic progression of integers."""

    start: int
    end: int
    step: int
    length: int = field(init=False, repr=False)

    def __post_init__(self):
        if self.step == 0:
            raise InvalidStep("Numeric index step must not be zero")
        object.__setattr__(
            self, "length", numeric_length(self.start, self.end, self.step)
        )

    def label_at(self, position: int) -> Label:
        return self.start + position * self.step

    def position_of(self, label: Label) -> int | None:
        value = integral_value(label)
        if value is None:
            return None
        if self.step > 0 and (value < self.start or value >= self.end):
            return None
        if self.step < 0 and (value > self.start or value <= self.end):
            return None
        if (value - self.start) % self.step != 0:
            return None
        return (value - self.start) // self.step

    def last_labels(self, n: int) -> tuple:
        first = self.length - n
        return tuple(self.start + i * self.step for i in range(first, self.length))

    def iter_labels(self) -> Iterator[Label]:
        return iter(range(self.start, self.end, self.step))


@dataclass(frozen=True)
class FusedPair:
    """Representation of ``left`` followed by ``right``.

    ``right`` never holds a label already present in ``left``;
    :meth:`Index.fuse` removes them before building the pair.
    Lookups walk the tree iteratively so long chains of fusions do not
    exhaust the interpreter stack.
    """

    left: Index
    right: Index

    @property
    def length(self) -> int:
        return self.left.length + self.right.length

    def leaves(self, reverse: bool = False) -> Iterator[Index]:
        """Yield the non-fused indices of this tree in order."""
        stack = [self.left, self.right] if reverse else [self.right, self.left]
        while stack:
            node = stack.pop()
            rep = node.representation
            if isinstance(rep, FusedPair):
                if reverse:
                    stack.extend((rep.left, rep.right))
                else:
                    stack.extend((rep.right, rep.left))
            else:
                yield node

    def label_at(self, position: int) -> Label:
        rep: IndexRepresentation = self
        while isinstance(rep, FusedPair):
            left_length = rep.left.length
            if position < left_length:
                rep = rep.left.representation
            else:
                position -= left_length
                rep = rep.right.representation
        return rep.label_at(position)

    def position_of(self, label: Label) -> int | None:
        offset = 0
        for leaf in self.leaves():
            position = leaf.representation.position_of(label)
            if position is not None:
                return offset + position
            offset += leaf.length
        return None

    def last_labels(self, n: int) -> tuple:
        chunks = []
        for leaf in self.leaves(reverse=True):
            if n <= 0:
                break
            take = min(n, leaf.length)
            if take:
                chunks.append(leaf.representation.last_labels(take))
            n -= take
        return tuple(label for chunk in reversed(chunks) for label in chunk)

    def iter_labels(self) -> Iterator[Label]:
        for leaf in self.leaves():
            yield from leaf.representation.iter_labels()


IndexRepresentation = Union[ExplicitLabels, NumericRange, FusedPair]


class Index:
    """An immutable, possibly lazy, sequence of row labels.

    Parameters
    ----------
    name : str | None
        Name of the index.  ``None`` is stored as ``""``.
    labels : Iterable[Label]
        The labels, copied at construction time.

    Raises
    ------
    NullArgument
        If ``labels`` is None.
    UnsupportedLabel
        If a label is not one of the supported scalar kinds.

    Examples
    --------
    >>> Index("", [0, 1, 2]) == Index.numeric("", 0, 3)
    True
    >>> Index.numeric("", 10, 0, -2).labels()
    (10, 8, 6, 4, 2)
    """

    __slots__ = ("_name", "_rep", "_length", "_hash")

    def __init__(self, name: str | None, labels: Iterable[Label]) -> None:
        require(labels, "labels")
        self._setup(name, ExplicitLabels(tuple(normalize_label(v) for v in labels)))

    def _setup(self, name: str | None, rep: IndexRepresentation) -> None:
        object.__setattr__(self, "_name", "" if name is None else str(name))
        object.__setattr__(self, "_rep", rep)
        object.__setattr__(self, "_length", rep.length)
        object.__setattr__(self, "_hash", None)

    def __setattr__(self, name: str, value) -> None:
        raise AttributeError(f"Index is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Index is immutable; cannot delete {name!r}")

    @classmethod
    def _from_representation(
        cls, name: str | None, rep: IndexRepresentation
    ) -> Index:
        index = cls.__new__(cls)
        index._setup(name, rep)
        return index

    @classmethod
    def numeric(cls, name: str | None, start: int, end: int, step: int = 1) -> Index:
        """Create an index over the progression ``start, start+step, ...`` up to ``end``.

        Parameters
        ----------
        name : str | None
            Name of the index.
        start : int
            First label (inclusive).
        end : int
            Bound (exclusive).
        step : int, default 1
            Increment between labels.  Must not be zero.

        Returns
        -------
        Index
            A numeric index; its labels are computed on demand.

        Raises
        ------
        InvalidStep
            If ``step`` is zero.
        """
        rep = NumericRange(operator.index(start), operator.index(end), operator.index(step))
        return cls._from_representation(name, rep)

    @classmethod
    def positional(cls, n: int, name: str | None = "") -> Index:
        """Explicit index holding ``0, 1, ..., n - 1``."""
        return cls(name, range(n))

    @classmethod
    def from_strings(cls, *tokens: str) -> Index:
        """Unnamed explicit index whose labels are parsed from text tokens."""
        return cls("", [parse_label(token) for token in tokens])

    @property
    def name(self) -> str:
        """Name of the index (possibly empty)."""
        return self._name

    @property
    def length(self) -> int:
        """Number of labels."""
        return self._length

    @property
    def representation(self) -> IndexRepresentation:
        """The active representation of this index."""
        return self._rep

    def __len__(self) -> int:
        return self._length

    def label_at(self, position: int) -> Label:
        """Return the label at ``position``.

        Raises
        ------
        IndexOutOfRange
            If ``position`` is outside ``[0, length)``.  Negative
            positions are not counted from the end.
        """
        position = operator.index(position)
        if position < 0 or position >= self._length:
            raise IndexOutOfRange(
                f"Position {position} is not valid for an index of length {self._length}"
            )
        return self._rep.label_at(position)

    def __getitem__(self, position: int) -> Label:
        return self.label_at(position)

    def position_of(self, label: Label) -> int | None:
        """Position of the first occurrence of ``label``, or None.

        The absent label ``None`` is never found.  Numeric indices match
        integers and integral floats arithmetically, without scanning.
        """
        if label is None:
            return None
        return self._rep.position_of(label)

    def contains(self, label: Label) -> bool:
        """Return True if ``label`` occurs in the index."""
        return self.position_of(label) is not None

    def __contains__(self, label: Label) -> bool:
        return self.contains(label)

    def _unique_labels_of(self, other: Index) -> list:
        require(other, "other index")
        return [label for label in other if not self.contains(label)]

    def fuse(self, other: Index) -> Index:
        """Append to this index the labels of ``other`` it does not already hold.

        The result keeps this index and a deduplicated copy of ``other``
        as the two halves of a fused index; nothing is flattened.  The
        result is named after this index.  Fusion is not commutative.

        Parameters
        ----------
        other : Index
            Index whose new labels are appended, in their original order.

        Returns
        -------
        Index
            The fused index.
        """
        unique = self._unique_labels_of(other)
        logger.debug(
            "Fusing index %r (%d labels) with %d new labels from %r",
            self._name,
            self._length,
            len(unique),
            other.name,
        )
        return Index._from_representation(
            self._name, FusedPair(self, Index(other.name, unique))
        )

    def last_labels(self, n: int) -> tuple:
        """The last ``min(n, length)`` labels in order; empty if ``n <= 0``."""
        if n <= 0:
            return ()
        return self._rep.last_labels(min(n, self._length))

    def fuse_and_last(self, other: Index, n: int) -> tuple:
        """The last ``n`` labels of ``self.fuse(other)`` without building it.

        Parameters
        ----------
        other : Index
            Index that would be fused onto this one.
        n : int
            Number of trailing labels wanted.

        Returns
        -------
        tuple
            At most ``n`` labels.
        """
        unique = self._unique_labels_of(other)
        if n <= 0:
            return ()
        if len(unique) >= n:
            return tuple(unique[len(unique) - n :])
        return self.last_labels(n - len(unique)) + tuple(unique)

    def labels(self) -> tuple:
        """Materialize every label, in order."""
        if isinstance(self._rep, ExplicitLabels):
            return self._rep.labels
        return tuple(self._rep.iter_labels())

    def __iter__(self) -> Iterator[Label]:
        return self._rep.iter_labels()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Index):
            return NotImplemented
        if self._length != other._length:
            return False
        mine, theirs = self._rep, other._rep
        if isinstance(mine, NumericRange) and isinstance(theirs, NumericRange):
            if self._length == 0:
                return True
            return mine.start == theirs.start and (
                self._length == 1 or mine.step == theirs.step
            )
        return all(
            label_key(a) == label_key(b)
            for a, b in zip(self, other, strict=True)
        )

    def __hash__(self) -> int:
        if self._hash is None:
            object.__setattr__(
                self, "_hash", hash(tuple(label_key(label) for label in self))
            )
        return self._hash

    def __repr__(self) -> str:
        rep = self._rep
        if isinstance(rep, NumericRange):
            return f"Index.numeric({self._name!r}, {rep.start}, {rep.end}, {rep.step})"
        if isinstance(rep, FusedPair):
            return f"Index({self._name!r}, fused={rep.left!r} + {rep.right!r})"
        return f"Index({self._name!r}, {list(rep.labels)!r})"
