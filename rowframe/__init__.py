"""rowframe: immutable indices, columns and tables with a lazy index algebra.

The rowframe package provides a small spreadsheet-like data model:
- Index: row labels as an explicit list, a numeric range, or a lazy fusion of two indices
- Column: a named sequence of values over an index
- Table: uniquely named columns sharing one row index
- Text reading/rendering and a command line front end
- Conversion to and from pandas
"""

import logging
from importlib import metadata

# Core data model
from .column import Column
from .errors import (
    DescriptorError,
    DuplicateColumnName,
    InconsistentIndex,
    IndexMismatch,
    IndexOutOfRange,
    InvalidStep,
    LengthMismatch,
    NullArgument,
    RowframeError,
    UnknownColumn,
    UnsupportedLabel,
)
from .index import ExplicitLabels, FusedPair, Index, NumericRange

# pandas conversion
from .interop import (
    column_from_series,
    column_to_series,
    index_from_pandas,
    index_to_pandas,
    table_from_frame,
    table_to_frame,
)
from .labels import Label, LabelKind, format_label, label_key, labels_equal, parse_label
from .table import Table

# Text format
from .textio import (
    TextFormat,
    read_column,
    read_index,
    read_table,
    render_column,
    render_index,
    render_table,
)

try:
    __version__ = metadata.version("rowframe")
except metadata.PackageNotFoundError:
    # Fallback for development installs
    __version__ = "0.1.0"

__all__ = [
    # Labels
    "Label",
    "LabelKind",
    "label_key",
    "labels_equal",
    "parse_label",
    "format_label",
    # Index
    "Index",
    "ExplicitLabels",
    "NumericRange",
    "FusedPair",
    # Columns and tables
    "Column",
    "Table",
    # Text format
    "TextFormat",
    "read_index",
    "read_column",
    "read_table",
    "render_index",
    "render_column",
    "render_table",
    # pandas
    "index_to_pandas",
    "index_from_pandas",
    "column_to_series",
    "column_from_series",
    "table_to_frame",
    "table_from_frame",
    # Errors
    "RowframeError",
    "NullArgument",
    "UnsupportedLabel",
    "InvalidStep",
    "LengthMismatch",
    "IndexMismatch",
    "DuplicateColumnName",
    "InconsistentIndex",
    "UnknownColumn",
    "IndexOutOfRange",
    "DescriptorError",
    # Logging
    "get_logger",
]


# Configure package-wide logging
def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger for the rowframe package.

    Parameters
    ----------
    name : str | None, optional
        Logger name. If None, uses the package name.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    if name is None:
        name = __name__.split(".")[0]
    return logging.getLogger(name)


# Set up default logging configuration
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
