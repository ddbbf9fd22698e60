"""Scalar labels carried by indices and cells.

A label is one of a closed set of plain Python scalars:

* ``None`` -- the absent label,
* ``bool``,
* ``int``,
* ``float``,
* ``datetime.datetime`` -- a timestamp,
* ``str`` -- text.

Labels compare *structurally*: two labels are equal only when they have
the same kind and the same payload.  Python itself considers ``1``,
``1.0`` and ``True`` equal, so every comparison inside rowframe goes
through :func:`label_key` instead of ``==``.

This module also owns the boundary classification of text tokens
(:func:`parse_label`) and the text form of labels used by the
renderers (:func:`format_label`).
"""

from __future__ import annotations

import math
import numbers
import re
from datetime import datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Union

import numpy as np
import pandas as pd

from .errors import UnsupportedLabel

Label = Union[None, bool, int, float, datetime, str]
"""Alias for any value that may be used as an index label."""

LabelKey = tuple
"""Alias for the ``(kind, payload)`` pair returned by :func:`label_key`."""

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|NaN|Infinity)"
)
_TIMESTAMP_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2})?)(?:\.(\d{1,9}))?"
    r"(Z|[+-]\d{2}:\d{2}(?::\d{2})?)?(?:\[[^\]]+\])?"
)
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class LabelKind(Enum):
    """The kinds of value a label can hold."""

    ABSENT = "absent"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    TEXT = "text"


def label_kind(value: Any) -> LabelKind:
    """Classify ``value`` into its :class:`LabelKind`.

    Parameters
    ----------
    value : Any
        Candidate label.  numpy scalars and pandas timestamps are
        accepted and classified like their builtin counterparts.

    Returns
    -------
    LabelKind
        The kind of the label.

    Raises
    ------
    UnsupportedLabel
        If ``value`` is not one of the supported scalar kinds.
    """
    if value is None or value is pd.NaT:
        return LabelKind.ABSENT
    # bool must be tested before int: bool is an int subclass.
    if isinstance(value, (bool, np.bool_)):
        return LabelKind.BOOL
    if isinstance(value, numbers.Integral):
        return LabelKind.INT
    if isinstance(value, numbers.Real):
        return LabelKind.FLOAT
    if isinstance(value, datetime):
        return LabelKind.TIMESTAMP
    if isinstance(value, str):
        return LabelKind.TEXT
    raise UnsupportedLabel(
        f"Unsupported label type {type(value).__name__}: {value!r}"
    )


def normalize_label(value: Any) -> Label:
    """Return ``value`` as a builtin Python label.

    numpy scalars become ``bool``/``int``/``float``, pandas timestamps
    become ``datetime`` and ``pd.NaT`` becomes ``None``.
    """
    kind = label_kind(value)
    if kind is LabelKind.ABSENT:
        return None
    if kind is LabelKind.BOOL:
        return bool(value)
    if kind is LabelKind.INT:
        return int(value)
    if kind is LabelKind.FLOAT:
        return float(value)
    if kind is LabelKind.TIMESTAMP:
        if isinstance(value, pd.Timestamp):
            return value.to_pydatetime()
        return value
    return str(value)


def label_key(value: Any) -> LabelKey:
    """Structural identity of a label: its kind paired with its payload."""
    return (label_kind(value), normalize_label(value))


def labels_equal(a: Any, b: Any) -> bool:
    """Return True if ``a`` and ``b`` are the same label."""
    return label_key(a) == label_key(b)


def value_key(value: Any) -> tuple:
    """Structural identity of a cell value.

    Values of a label kind use :func:`label_key`; any other value (a
    time of day produced by a mapping, say) is paired with its type.
    """
    try:
        return label_key(value)
    except UnsupportedLabel:
        return (type(value), value)


def integral_value(value: Any) -> int | None:
    """Return the integer a numeric label denotes, or None.

    Integers map to themselves and floats with an integral value map to
    the corresponding integer.  Every other kind (including booleans)
    yields None.
    """
    kind = label_kind(value)
    if kind is LabelKind.INT:
        return int(value)
    if kind is LabelKind.FLOAT:
        value = float(value)
        if math.isfinite(value) and value.is_integer():
            return int(value)
    return None


def parse_integer(text: str) -> int | None:
    """Parse ``text`` as a signed base-10 integer, returning None on failure.

    Surrounding whitespace is ignored.  Unlike :class:`int`, underscores
    and embedded spaces are rejected.
    """
    text = text.strip()
    if _INT_RE.fullmatch(text):
        return int(text)
    return None


def parse_label(token: str, null_token: str = "null") -> Label:
    """Classify a single text token into a label.

    Tokens are tried in order as a boolean (``true``/``false``, any
    case), a signed 64-bit integer, a decimal number, and an ISO
    date-time with at least hours and minutes (an offset or a bracketed
    zone may follow and is dropped).  The ``null_token`` (any case)
    stands for empty text; anything else is kept as text.

    Parameters
    ----------
    token : str
        A single whitespace-free token.
    null_token : str, optional
        Token that denotes empty text.  Defaults to ``"null"``.

    Returns
    -------
    Label
        The parsed label.
    """
    lowered = token.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.fullmatch(token):
        number = int(token)
        if _I64_MIN <= number <= _I64_MAX:
            return number
        return float(number)
    if _FLOAT_RE.fullmatch(token):
        return float(token.replace("Infinity", "inf"))
    stamp = _parse_timestamp(token)
    if stamp is not None:
        return stamp
    if lowered == null_token.lower():
        return ""
    return token


def _parse_timestamp(token: str) -> datetime | None:
    match = _TIMESTAMP_RE.fullmatch(token)
    if match is None:
        return None
    local, fraction, _offset = match.groups()
    text = local if fraction is None else f"{local}.{fraction[:6].ljust(6, '0')}"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_label(value: Any) -> str:
    """Render a label (or any cell value) as text.

    ``None`` renders as the empty string and booleans in lower case.
    Floats use plain decimal notation from 1e-3 up to 1e7 and
    ``<mantissa>E<exponent>`` outside it, always with a fractional part.
    Timestamps and times of day render in ISO form without zero seconds.
    """
    if value is None:
        return ""
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _format_float(value)
    if isinstance(value, (datetime, time)):
        return value.replace(tzinfo=None).isoformat(timespec=_timespec(value))
    return str(value)


def _format_float(value: float) -> str:
    magnitude = abs(value)
    if magnitude == 0 or 1e-3 <= magnitude < 1e7:
        return repr(value)
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    scientific = len(digits) - 1 + exponent
    rest = "".join(map(str, digits[1:])) or "0"
    return f"{'-' if sign else ''}{digits[0]}.{rest}E{scientific}"


def _timespec(value: datetime | time) -> str:
    if value.microsecond:
        return "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    if value.second:
        return "seconds"
    return "minutes"
