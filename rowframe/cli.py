"""Command line front end for rowframe.

Every command reads index, column or table blocks in the text format of
:mod:`rowframe.textio` from standard input, applies one operation and
prints the result.  Run ``rowframe --help`` for the list of commands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterator, Sequence
from datetime import datetime
from typing import Any, TextIO

from . import get_logger
from .errors import RowframeError
from .index import Index
from .labels import format_label, parse_integer, parse_label
from .textio import (
    LineSource,
    read_column,
    read_index,
    read_table,
    render_column,
    render_index,
    render_table,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _scalar(value: Any) -> str:
    """Text of a single looked-up value; a missing value prints as ``null``."""
    return "null" if value is None else format_label(value)


def _joined(labels: Sequence[Any]) -> str:
    return ", ".join(_scalar(label) for label in labels)


def _integers(stream: TextIO) -> Iterator[int]:
    """Yield whitespace separated integers, stopping at the first other token."""
    for line in stream:
        for token in line.split():
            number = parse_integer(token)
            if number is None:
                return
            yield number


def _multiplier(factor: int) -> Callable[[Any], int]:
    def multiply(value: Any) -> int:
        number = parse_integer(format_label(value))
        if number is None:
            raise ValueError(f"Not an integer: {format_label(value)!r}")
        return number * factor

    return multiply


def _time_of_day(value: Any):
    if not isinstance(value, datetime):
        raise ValueError(f"Not a timestamp: {format_label(value)!r}")
    return value.time()


def _print_table_and_columns(table) -> None:
    print(render_table(table))
    for name in table.header_names:
        print()
        print(render_column(table[name]))


# Index commands


def cmd_index_fuse(args: argparse.Namespace, stdin: TextIO) -> None:
    lines = LineSource(stdin)
    while lines.has_more():
        first = read_index(lines)
        if not lines.has_more():
            break
        print(render_index(first.fuse(read_index(lines))))
        print()


def cmd_index_equal(args: argparse.Namespace, stdin: TextIO) -> None:
    lines = LineSource(stdin)
    while lines.has_more():
        first = read_index(lines)
        if not lines.has_more():
            break
        print(format_label(first == read_index(lines)))


def cmd_index_numeric(args: argparse.Namespace, stdin: TextIO) -> None:
    numbers = _integers(stdin)
    for start in numbers:
        end = next(numbers, None)
        if end is None:
            break
        print(render_index(Index.numeric("", start, end, args.step)))
        print()


def cmd_index_last(args: argparse.Namespace, stdin: TextIO) -> None:
    index = Index.numeric("", args.start, args.end, args.step)
    for n in _integers(stdin):
        print(_joined(index.last_labels(n)))


def cmd_index_fuse_last(args: argparse.Namespace, stdin: TextIO) -> None:
    index = Index.numeric("", args.start, args.end, args.step)
    other = read_index(LineSource(stdin))
    print(_joined(index.fuse_and_last(other, args.count)))


def cmd_index_fuse_stride(args: argparse.Namespace, stdin: TextIO) -> None:
    if args.stride <= 0:
        raise ValueError("Stride must be positive")
    index = Index.numeric("", args.start, args.end, args.step)
    fused = index.fuse(read_index(LineSource(stdin)))
    print(_joined([fused.label_at(p) for p in range(0, fused.length, args.stride)]))


def cmd_index_position(args: argparse.Namespace, stdin: TextIO) -> None:
    position = read_index(LineSource(stdin)).position_of(parse_label(args.label))
    print(-1 if position is None else position)


# Column commands


def cmd_column_stack(args: argparse.Namespace, stdin: TextIO) -> None:
    lines = LineSource(stdin)
    while lines.has_more():
        first = read_column(lines)
        if not lines.has_more():
            break
        print(render_column(first.stack(read_column(lines))))


def cmd_column_index(args: argparse.Namespace, stdin: TextIO) -> None:
    lines = LineSource(stdin)
    column = read_column(lines)
    print(render_column(column.with_index(read_index(lines))))


def cmd_column_realign(args: argparse.Namespace, stdin: TextIO) -> None:
    lines = LineSource(stdin)
    column = read_column(lines)
    print(render_column(column.realign(read_index(lines))))


def cmd_column_value(args: argparse.Namespace, stdin: TextIO) -> None:
    column = read_column(LineSource(stdin))
    print(_scalar(column.value_at(parse_label(args.label))))


def cmd_column_multiply(args: argparse.Namespace, stdin: TextIO) -> None:
    column = read_column(LineSource(stdin))
    print(render_column(column.map(_multiplier(args.factor))))


def cmd_column_time(args: argparse.Namespace, stdin: TextIO) -> None:
    column = read_column(LineSource(stdin))
    print(render_column(column.map(_time_of_day)))


# Table commands


def cmd_table_stack(args: argparse.Namespace, stdin: TextIO) -> None:
    lines = LineSource(stdin)
    table = read_table(lines)
    print(render_table(table.stack(read_table(lines))))


def cmd_table_juxtapose(args: argparse.Namespace, stdin: TextIO) -> None:
    lines = LineSource(stdin)
    table = read_table(lines)
    print(render_table(table.juxtapose(read_table(lines))))


def cmd_table_row_index(args: argparse.Namespace, stdin: TextIO) -> None:
    table = read_table(LineSource(stdin))
    _print_table_and_columns(table.with_row_index(Index.from_strings(*args.labels)))


def cmd_table_headers(args: argparse.Namespace, stdin: TextIO) -> None:
    table = read_table(LineSource(stdin))
    _print_table_and_columns(table.with_headers(Index.from_strings(*args.names)))


def cmd_table_multiply(args: argparse.Namespace, stdin: TextIO) -> None:
    table = read_table(LineSource(stdin))
    print(render_table(table.map(_multiplier(args.factor))))


def cmd_table_sum(args: argparse.Namespace, stdin: TextIO) -> None:
    print(render_table(read_table(LineSource(stdin)).aggregate_sum()))


def cmd_table_value(args: argparse.Namespace, stdin: TextIO) -> None:
    table = read_table(LineSource(stdin))
    print(_scalar(table.cell_value(parse_label(args.row), args.column)))


def _add_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("start", type=int, help="First label of the numeric index")
    parser.add_argument("end", type=int, help="Exclusive bound of the numeric index")
    parser.add_argument("step", type=int, help="Step of the numeric index")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="rowframe",
        description="Apply index, column and table operations to text read from stdin",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level of the rowframe logger",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    sub = commands.add_parser("index-fuse", help="Fuse consecutive pairs of indices")
    sub.set_defaults(handler=cmd_index_fuse)

    sub = commands.add_parser("index-equal", help="Compare consecutive pairs of indices")
    sub.set_defaults(handler=cmd_index_equal)

    sub = commands.add_parser(
        "index-numeric", help="Print numeric indices for start/end pairs read from stdin"
    )
    sub.add_argument("step", type=int, nargs="?", default=1, help="Step (default 1)")
    sub.set_defaults(handler=cmd_index_numeric)

    sub = commands.add_parser(
        "index-last", help="Last n labels of a numeric index, for each n read from stdin"
    )
    _add_range_arguments(sub)
    sub.set_defaults(handler=cmd_index_last)

    sub = commands.add_parser(
        "index-fuse-last", help="Last labels of a numeric index fused with stdin"
    )
    _add_range_arguments(sub)
    sub.add_argument("--count", type=int, default=10, help="Labels to print (default 10)")
    sub.set_defaults(handler=cmd_index_fuse_last)

    sub = commands.add_parser(
        "index-fuse-stride", help="Every k-th label of a numeric index fused with stdin"
    )
    _add_range_arguments(sub)
    sub.add_argument("stride", type=int, help="Distance between printed positions")
    sub.set_defaults(handler=cmd_index_fuse_stride)

    sub = commands.add_parser("index-position", help="Position of a label in an index")
    sub.add_argument("label", help="Label to look up")
    sub.set_defaults(handler=cmd_index_position)

    sub = commands.add_parser("column-stack", help="Stack consecutive pairs of columns")
    sub.set_defaults(handler=cmd_column_stack)

    sub = commands.add_parser("column-index", help="Replace the index of a column")
    sub.set_defaults(handler=cmd_column_index)

    sub = commands.add_parser("column-realign", help="Realign a column onto an index")
    sub.set_defaults(handler=cmd_column_realign)

    sub = commands.add_parser("column-value", help="Value of a column at a label")
    sub.add_argument("label", help="Row label")
    sub.set_defaults(handler=cmd_column_value)

    sub = commands.add_parser("column-multiply", help="Multiply integer column values")
    sub.add_argument("factor", type=int, help="Multiplier")
    sub.set_defaults(handler=cmd_column_multiply)

    sub = commands.add_parser("column-time", help="Time of day of timestamp values")
    sub.set_defaults(handler=cmd_column_time)

    sub = commands.add_parser("table-stack", help="Stack two tables vertically")
    sub.set_defaults(handler=cmd_table_stack)

    sub = commands.add_parser("table-juxtapose", help="Join two tables side by side")
    sub.set_defaults(handler=cmd_table_juxtapose)

    sub = commands.add_parser("table-row-index", help="Replace the row index of a table")
    sub.add_argument("labels", nargs="*", help="New row labels")
    sub.set_defaults(handler=cmd_table_row_index)

    sub = commands.add_parser("table-headers", help="Rename the columns of a table")
    sub.add_argument("names", nargs="*", help="New column names")
    sub.set_defaults(handler=cmd_table_headers)

    sub = commands.add_parser("table-multiply", help="Multiply integer table values")
    sub.add_argument("factor", type=int, help="Multiplier")
    sub.set_defaults(handler=cmd_table_multiply)

    sub = commands.add_parser("table-sum", help="Integer total of every column")
    sub.set_defaults(handler=cmd_table_sum)

    sub = commands.add_parser("table-value", help="Value of a single cell")
    sub.add_argument("row", help="Row label")
    sub.add_argument("column", help="Column name")
    sub.set_defaults(handler=cmd_table_value)

    return parser


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    """Run the command line interface.

    Parameters
    ----------
    argv : Sequence[str], optional
        Arguments without the program name.  Defaults to ``sys.argv[1:]``.
    stdin : TextIO, optional
        Input stream.  Defaults to ``sys.stdin``.

    Returns
    -------
    int
        ``EXIT_OK`` on success, ``EXIT_ERROR`` if the input was rejected.
    """
    args = build_parser().parse_args(argv)
    get_logger().setLevel(args.log_level)
    logger.debug("Running command %s", args.command)
    try:
        args.handler(args, sys.stdin if stdin is None else stdin)
    except (RowframeError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"rowframe: error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
