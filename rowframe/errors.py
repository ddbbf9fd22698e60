"""Exception hierarchy for rowframe.

Every failure raised by the library derives from :class:`RowframeError`.
Each subclass also derives from the builtin exception a caller would
naturally expect (``ValueError`` for bad counts, ``KeyError`` for a
missing column, ``IndexError`` for a bad position, ...), so code that
does not know about rowframe can still catch them.
"""


class RowframeError(Exception):
    """Base class for all rowframe errors."""


class NullArgument(RowframeError, TypeError):
    """A required index, column, table or collection argument is ``None``."""


class UnsupportedLabel(RowframeError, TypeError):
    """A value outside the closed set of label kinds was used as a label."""


class InvalidStep(RowframeError, ValueError):
    """A numeric index was constructed with ``step == 0``."""


class LengthMismatch(RowframeError, ValueError):
    """An index length does not match a value or column count."""


class IndexMismatch(RowframeError, ValueError):
    """A column's index is not structurally equal to its table's row index."""


class DuplicateColumnName(RowframeError, ValueError):
    """Two columns resolve to the same name."""


class InconsistentIndex(RowframeError, ValueError):
    """A column transformation produced columns with differing indices."""


class UnknownColumn(RowframeError, KeyError):
    """A lookup or rename targets a column that does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class IndexOutOfRange(RowframeError, IndexError):
    """A position outside ``[0, length)`` was requested from an index."""


class DescriptorError(RowframeError, ValueError):
    """A descriptor line of the text format could not be parsed."""


def require(value, what: str):
    """Return ``value`` unchanged, raising :class:`NullArgument` if it is None."""
    if value is None:
        raise NullArgument(f"{what} must not be None")
    return value
