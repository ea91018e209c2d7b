"""
Argosy value coercion: turn raw argument strings into typed values.

Kinds
- ValueKind is a closed enumeration of the supported primitive kinds:
  CHAR, STRING, BYTE, SHORT, INT, LONG, FLOAT, DOUBLE.
- Anywhere a kind is accepted, a callable may be passed instead (a custom
  parser). It is called with the raw string and may raise anything; every
  exception is treated as a coercion failure by the callers.

Rules
- CHAR: the raw string must be exactly one character long.
- STRING: identity, never fails.
- BYTE/SHORT/INT/LONG: optional sign followed by ASCII decimal digits, within
  the two's-complement range of the kind's width.
- FLOAT/DOUBLE: decimal or scientific notation (plus literal inf/nan); values
  that overflow the kind's precision are rejected. FLOAT is rounded to
  single precision.

Quick example
    >>> coerce("42", ValueKind.BYTE)
    42
    >>> coerce("x", ValueKind.CHAR)
    'x'
    >>> coerce("abc", str.upper)
    'ABC'
"""
import math
import re
import struct
from enum import Enum

from .faults import UnknownValueTypeError


class ValueKind(Enum):
    """
    supported primitive kinds; the value is the label used in messages.
    """
    CHAR   = "character"
    STRING = "string"
    BYTE   = "8-bit integer"
    SHORT  = "16-bit integer"
    INT    = "32-bit integer"
    LONG   = "64-bit integer"
    FLOAT  = "32-bit float"
    DOUBLE = "64-bit float"

    @property
    def label(self):
        return self.value


_WIDTHS = {
    ValueKind.BYTE: 8,
    ValueKind.SHORT: 16,
    ValueKind.INT: 32,
    ValueKind.LONG: 64,
}


def _integer(raw, kind, /):
    if not re.fullmatch(r"[+-]?[0-9]+", raw, re.ASCII):
        raise ValueError(f"{raw!r} is not a valid {kind.label}")
    value = int(raw)
    bound = 1 << (_WIDTHS[kind] - 1)
    if not -bound <= value < bound:
        raise ValueError(f"{raw!r} is out of range for a {kind.label}")
    return value


def _real(raw, kind, /):
    if raw != raw.strip() or "_" in raw:
        raise ValueError(f"{raw!r} is not a valid {kind.label}")
    value = float(raw)  # raises ValueError on non-numeric text
    literal = re.fullmatch(r"[+-]?(inf|infinity)", raw, re.IGNORECASE)
    if kind is ValueKind.FLOAT and math.isfinite(value):
        try:
            value, = struct.unpack("f", struct.pack("f", value))
        except OverflowError:
            value = math.copysign(math.inf, value)
    # overflow surfaces as infinity here; only a spelled-out infinity may produce one
    if math.isinf(value) and not literal:
        raise ValueError(f"{raw!r} is out of range for a {kind.label}")
    return value


def coerce(raw, target, /):
    """
    convert `raw` to the kind (or with the parser) named by `target`.

    returns
    - the converted value.

    raises
    - ValueError for built-in kinds that cannot represent `raw`.
    - whatever a custom parser raises.
    - UnknownValueTypeError if `target` is neither a ValueKind nor callable.
    """
    if not isinstance(raw, str):
        raise TypeError("coerce() first argument must be a string")

    match target:
        case ValueKind.CHAR:
            if len(raw) != 1:
                raise ValueError(f"{raw!r} is not a single character")
            return raw
        case ValueKind.STRING:
            return raw
        case ValueKind.BYTE | ValueKind.SHORT | ValueKind.INT | ValueKind.LONG:
            return _integer(raw, target)
        case ValueKind.FLOAT | ValueKind.DOUBLE:
            return _real(raw, target)
        case _ if callable(target):
            return target(raw)
        case _:
            raise UnknownValueTypeError(
                "value type %r is not supported" % (target,),
                hint="use one of %s or a callable parser" % ", ".join(kind.name for kind in ValueKind),
                expected=target,
            )


def resolve(target, /):
    """
    validate a declared value type and return its canonical form.

    - ValueKind members and callables are returned unchanged.
    - kind names are accepted case-insensitively ("int" -> ValueKind.INT).
    - anything else raises UnknownValueTypeError.
    """
    if isinstance(target, ValueKind):
        return target
    if isinstance(target, str):
        try:
            return ValueKind[target.strip().upper()]
        except KeyError:
            pass
    elif callable(target):
        return target
    raise UnknownValueTypeError(
        "value type %r is not supported" % (target,),
        hint="use one of %s or a callable parser" % ", ".join(kind.name for kind in ValueKind),
        expected=target,
    )


def describe(target, /):
    """
    human label for a kind or a parser, used in fault messages.
    """
    if isinstance(target, ValueKind):
        return target.label
    return getattr(target, "__name__", type(target).__name__)


__all__ = (
    "ValueKind",
    "coerce",
    "resolve",
    "describe",
)
