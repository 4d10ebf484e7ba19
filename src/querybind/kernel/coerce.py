"""Strict, locale-invariant conversion of query strings into primitive values.

Python's int() and float() are more lenient than a query parser should be
(they accept surrounding whitespace and digit-group underscores), so each
parser checks the literal first and raises ValueError on anything else.
"""

import math
import re
from typing import Any, Callable, Dict

from .shapes import FieldKind

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
# A sign is allowed before inf and infinity, never before nan
_SPECIAL_FLOATS = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity", "nan"}

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

FAILURE_MESSAGES: Dict[FieldKind, str] = {
    FieldKind.INTEGER: "must be a valid integer",
    FieldKind.REAL: "must be a valid float",
    FieldKind.BOOLEAN: "must be a valid boolean",
}


def parse_int(text: str) -> int:
    """Parse a base-10 signed integer that fits in 64 bits."""
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer literal: {text!r}")
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def parse_float(text: str) -> float:
    """Parse a double precision float.

    Accepts decimal and exponent notation, hexadecimal floats with a binary exponent (``0x1p-2``),
    and the special values inf, infinity (optionally signed) and nan
    (unsigned), in any letter case.
    Finite literals that overflow to infinity are rejected.
    """
    if text.lower() in _SPECIAL_FLOATS:
        return float(text)
    if _HEX_FLOAT_RE.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError as e:
            raise ValueError(f"float out of range: {text!r}") from e
        return value
    if not _DECIMAL_FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid float literal: {text!r}")
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"float out of range: {text!r}")
    return value


def parse_bool(text: str) -> bool:
    """Parse one of the accepted boolean literals."""
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: {text!r}")


_PARSERS: Dict[FieldKind, Callable[[str], Any]] = {
    FieldKind.TEXT: str,
    FieldKind.INTEGER: parse_int,
    FieldKind.REAL: parse_float,
    FieldKind.BOOLEAN: parse_bool,
}


def coerce(kind: FieldKind, text: str) -> Any:
    """Convert a raw query string into a value of the given kind.

    Raises:
        ValueError: If the text is not a valid literal for the kind
    """
    return _PARSERS[kind](text)


def failure_message(kind: FieldKind, index: int | None = None) -> str:
    """Validation message for a failed conversion, index-prefixed for list elements."""
    message = FAILURE_MESSAGES[kind]
    if index is None:
        return message
    return f"(Index: {index}) {message}"
