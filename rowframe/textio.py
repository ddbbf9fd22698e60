"""Plain-text reading and rendering of indices, columns and tables.

The text format is line oriented.  A descriptor line announces a block
and the following line(s) carry whitespace separated values::

    #index[3, city]
    Rome Milan Turin

    #column[3, integer, population]
    #index[3, city]
    Rome Milan Turin
    2873 1372 848

    #table[3, 2]
    #column[3, integer, a]
    1 2 3
    #column[3, string, b]
    x y z

A column block may carry its own ``#index`` block; without one the
column gets the positional index ``0 .. rows-1``.  Value tokens are
classified with :func:`rowframe.labels.parse_label`.

Rendering produces fixed-width, pipe-delimited text whose rules are sized
to the widest field of each column.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .column import Column
from .errors import DescriptorError
from .index import Index
from .labels import format_label, parse_label
from .table import PLACEHOLDER_NAME, Table

logger = logging.getLogger(__name__)

DESCRIPTOR_RE = re.compile(
    r"#(\w+)\[(\d+)(?:\s*,\s*([^,\]]+))?(?:\s*,\s*([^\]]+))?]"
)


class ValueType(Enum):
    """Value types a column or table descriptor may declare."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    INTEGER = "integer"
    DOUBLE = "double"
    DATETIME = "datetime"
    ANY = "any"

    @classmethod
    def from_name(cls, name: str | None) -> ValueType:
        """Case-insensitive lookup; unknown or missing names give ``ANY``."""
        if name is None:
            return cls.ANY
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.ANY


@dataclass(frozen=True)
class TextFormat:
    """Options of the text format.

    Attributes
    ----------
    null_token : str, default "null"
        Value token (any case) read as empty text.  Also hides index
        and column names equal to it when rendering.
    placeholder_name : str, default "Unnamed"
        Name given to columns whose descriptor carries none; rendered
        as an empty header.
    separator : str, default " | "
        Text between rendered fields.
    junction : str, default "-+-"
        Text between the dash rules of adjacent fields.
    rule_char : str, default "-"
        Character of the rule under the header.
    """

    null_token: str = "null"
    placeholder_name: str = PLACEHOLDER_NAME
    separator: str = " | "
    junction: str = "-+-"
    rule_char: str = "-"


DEFAULT_FORMAT = TextFormat()


@dataclass(frozen=True)
class IndexDescriptor:
    """``#index[length, name]``."""

    length: int
    name: str = ""

    def __post_init__(self):
        if self.length <= 0:
            raise DescriptorError("Index length must be positive")
        object.__setattr__(self, "name", (self.name or "").strip())


@dataclass(frozen=True)
class ColumnDescriptor:
    """``#column[rows, type, name]``."""

    rows: int
    value_type: ValueType = ValueType.ANY
    name: str = PLACEHOLDER_NAME

    def __post_init__(self):
        if self.rows <= 0:
            raise DescriptorError("Row number must be positive")
        name = PLACEHOLDER_NAME if self.name is None else self.name.strip()
        object.__setattr__(self, "name", name)


@dataclass(frozen=True)
class TableDescriptor:
    """``#table[rows, cols, type]``."""

    rows: int
    cols: int
    value_type: ValueType = ValueType.ANY

    def __post_init__(self):
        if self.rows <= 0:
            raise DescriptorError("Row number must be positive")
        if self.cols <= 0:
            raise DescriptorError("Column number must be positive")


Descriptor = Union[IndexDescriptor, ColumnDescriptor, TableDescriptor]


def parse_descriptor(line: str) -> Descriptor | None:
    """Parse a descriptor line.

    Parameters
    ----------
    line : str
        A line of input.  Surrounding whitespace is ignored.

    Returns
    -------
    Descriptor | None
        The descriptor, or None if the line is not shaped like one.

    Raises
    ------
    DescriptorError
        If the line is shaped like a descriptor but names an unknown
        block kind, lacks a required count, or declares a non-positive
        count.
    """
    match = DESCRIPTOR_RE.fullmatch(line.strip())
    if match is None:
        return None
    kind, count, third, fourth = match.groups()
    if kind == "index":
        return IndexDescriptor(int(count), third or "")
    if kind == "column":
        return ColumnDescriptor(
            int(count),
            ValueType.from_name(third),
            PLACEHOLDER_NAME if fourth is None else fourth,
        )
    if kind == "table":
        if third is None or not third.strip().isdigit():
            raise DescriptorError(f"Error parsing descriptor: {line}")
        return TableDescriptor(int(count), int(third), ValueType.from_name(fourth))
    raise DescriptorError(f"Unknown descriptor type: {kind}")


def parse_values(line: str, n: int, fmt: TextFormat = DEFAULT_FORMAT) -> list[Any]:
    """Read the first ``n`` whitespace separated values of ``line``.

    Missing trailing values are None.
    """
    values: list[Any] = [None] * n
    for position, token in enumerate(line.split()[:n]):
        values[position] = parse_label(token, fmt.null_token)
    return values


class LineSource:
    """Iterator over the non-blank lines of an input, with one line lookahead."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)
        self._pending: str | None = None

    @classmethod
    def from_text(cls, text: str) -> LineSource:
        return cls(text.splitlines())

    def _fill(self) -> bool:
        while self._pending is None:
            line = next(self._lines, None)
            if line is None:
                return False
            line = line.rstrip("\r\n")
            if line.strip():
                self._pending = line
        return True

    def has_more(self) -> bool:
        """True if a non-blank line remains."""
        return self._fill()

    def peek(self) -> str | None:
        """The next non-blank line without consuming it, or None at the end."""
        return self._pending if self._fill() else None

    def next_line(self) -> str:
        """Consume and return the next non-blank line.

        Raises
        ------
        DescriptorError
            If the input is exhausted.
        """
        if not self._fill():
            raise DescriptorError("Unexpected end of input")
        line, self._pending = self._pending, None
        return line

    def __iter__(self) -> Iterator[str]:
        while self.has_more():
            yield self.next_line()


def _source(lines: LineSource | Iterable[str]) -> LineSource:
    return lines if isinstance(lines, LineSource) else LineSource(lines)


def read_index(
    lines: LineSource | Iterable[str], fmt: TextFormat = DEFAULT_FORMAT
) -> Index:
    """Read an ``#index`` block."""
    lines = _source(lines)
    line = lines.next_line()
    descriptor = parse_descriptor(line)
    if not isinstance(descriptor, IndexDescriptor):
        raise DescriptorError(f"Expected an index descriptor, got: {line}")
    logger.debug("Reading %s", descriptor)
    labels = parse_values(lines.next_line(), descriptor.length, fmt)
    return Index(descriptor.name, labels)


def read_column(
    lines: LineSource | Iterable[str], fmt: TextFormat = DEFAULT_FORMAT
) -> Column[Any]:
    """Read a ``#column`` block, with its optional ``#index`` block."""
    lines = _source(lines)
    line = lines.next_line()
    descriptor = parse_descriptor(line)
    if not isinstance(descriptor, ColumnDescriptor):
        raise DescriptorError(f"Invalid column descriptor: {line}")
    logger.debug("Reading %s", descriptor)
    following = lines.peek()
    if following is not None and following.lstrip().startswith("#index"):
        index = read_index(lines, fmt)
    else:
        index = Index.positional(descriptor.rows)
    values = parse_values(lines.next_line(), descriptor.rows, fmt)
    return Column(descriptor.name, index, values)


def read_table(
    lines: LineSource | Iterable[str], fmt: TextFormat = DEFAULT_FORMAT
) -> Table[Any]:
    """Read a ``#table`` block followed by its column blocks.

    The index of the first column becomes the row index of the table.
    """
    lines = _source(lines)
    line = lines.next_line()
    descriptor = parse_descriptor(line)
    if not isinstance(descriptor, TableDescriptor):
        raise DescriptorError(f"Expected a table descriptor, got: {line}")
    logger.debug("Reading %s", descriptor)
    columns = [read_column(lines, fmt) for _ in range(descriptor.cols)]
    if not columns:
        return Table(Index("", []), [])
    return Table(columns[0].index, columns)


def _display_name(name: str | None, fmt: TextFormat, *hidden: str) -> str:
    if name is None or name == fmt.null_token or name in hidden:
        return ""
    return name


def _width(header: str, fields: Iterable[str]) -> int:
    return max([len(header), *(len(text) for text in fields)])


def render_index(index: Index, fmt: TextFormat = DEFAULT_FORMAT) -> str:
    """Render an index as its name, a dash rule and one right-aligned label per line."""
    name = _display_name(index.name, fmt)
    labels = [format_label(label) for label in index]
    width = _width(name, labels)
    lines = []
    if name:
        lines.extend([name, fmt.rule_char * width])
    elif labels:
        lines.append(fmt.rule_char * width)
    lines.extend(label.rjust(width) for label in labels)
    return "\n".join(lines)


def render_column(column: Column[Any], fmt: TextFormat = DEFAULT_FORMAT) -> str:
    """Render a column next to its index labels."""
    index_name = _display_name(column.index.name, fmt)
    labels = [format_label(label) for label in column.index]
    index_width = _width(index_name, labels)
    name = _display_name(column.name, fmt, fmt.placeholder_name)
    values = [format_label(value) for value in column.values]
    width = _width(name, values)
    lines = [
        f"{index_name:>{index_width}}{fmt.separator}{name}",
        fmt.rule_char * index_width + fmt.junction + fmt.rule_char * width,
    ]
    for label, value in zip(labels, values):
        lines.append(f"{label:>{index_width}}{fmt.separator}{value:<{width}}")
    return "\n".join(lines)


def render_table(table: Table[Any], fmt: TextFormat = DEFAULT_FORMAT) -> str:
    """Render a table with one pipe-delimited field per column."""
    index_name = _display_name(table.row_index.name, fmt)
    labels = [format_label(label) for label in table.row_index]
    index_width = _width(index_name, labels)
    cells = {
        name: [format_label(value) for value in table[name].values]
        for name in table.header_names
    }
    widths = {name: _width(name, texts) for name, texts in cells.items()}

    header = f"{index_name:>{index_width}}" + "".join(
        f"{fmt.separator}{name:<{widths[name]}}" for name in cells
    )
    rule = fmt.rule_char * index_width + "".join(
        fmt.junction + fmt.rule_char * widths[name] for name in cells
    )
    lines = [header, rule]
    for row, label in enumerate(labels):
        lines.append(
            f"{label:>{index_width}}"
            + "".join(
                f"{fmt.separator}{texts[row]:<{widths[name]}}"
                for name, texts in cells.items()
            )
        )
    return "\n".join(lines)
