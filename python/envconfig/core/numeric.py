"""Sized numeric types and their primitive counterparts.

Python integers are unbounded, so fixed-width integers are expressed as
``NewType`` markers. Values are plain ``int``/``float``; the width is
enforced when parsing:

    port: Int16                 # "70000" fails to bind
    ratio: Float32              # rounded to single precision

Primitive types:
    Every wrapper type is linked with a ``ctypes`` scalar. The primitive
    form matters for arrays: ``tuple[c_int32, ...]`` materializes a
    fixed-size ``ctypes`` array while ``tuple[Int32, ...]`` gives a tuple.
    A parser registered for one side of a pair is registered for both.
"""

from __future__ import annotations

import ctypes
import re
import struct
from decimal import Decimal
from typing import Any, NewType

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)

INTEGER_BITS: dict[Any, int] = {
    Int8: 8,
    Int16: 16,
    Int32: 32,
    Int64: 64,
}

WRAPPER_TO_PRIMITIVE: dict[Any, type] = {
    bool: ctypes.c_bool,
    Int8: ctypes.c_int8,
    Int16: ctypes.c_int16,
    Int32: ctypes.c_int32,
    Int64: ctypes.c_int64,
    Float32: ctypes.c_float,
    float: ctypes.c_double,
}

PRIMITIVE_TO_WRAPPER: dict[type, Any] = {
    primitive: wrapper for wrapper, primitive in WRAPPER_TO_PRIMITIVE.items()
}

_INTEGER = re.compile(r"[-+]?[0-9]+")
_DECIMAL = re.compile(r"[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")


def linked_type(tp: Any) -> Any | None:
    """Return the other half of a wrapper/primitive pair, or None."""
    try:
        return WRAPPER_TO_PRIMITIVE.get(tp) or PRIMITIVE_TO_WRAPPER.get(tp)
    except TypeError:
        # unhashable hint
        return None


def is_primitive(tp: Any) -> bool:
    """Check if a type is one of the linked ``ctypes`` scalars."""
    try:
        return tp in PRIMITIVE_TO_WRAPPER
    except TypeError:
        return False


def parse_int(text: str) -> int:
    """Parse a plain decimal integer; no whitespace, underscores or base prefixes."""
    if _INTEGER.fullmatch(text) is None:
        raise ValueError(f"invalid integer literal: {text!r}")
    return int(text)


def signed_int_parser(bits: int):
    """Build a ``str -> int`` function that rejects values outside ``bits``."""
    low = -(1 << (bits - 1))
    high = (1 << (bits - 1)) - 1

    def parse(text: str) -> int:
        number = parse_int(text)
        if not low <= number <= high:
            raise ValueError(
                f"value {number} out of range for {bits}-bit integer [{low}, {high}]"
            )
        return number

    return parse


def parse_decimal(text: str) -> Decimal:
    """Parse a finite decimal literal; NaN and Infinity are rejected."""
    if _DECIMAL.fullmatch(text) is None:
        raise ValueError(f"invalid decimal literal: {text!r}")
    return Decimal(text)


def parse_float32(text: str) -> float:
    """Parse a float and round it to single precision."""
    return struct.unpack("f", struct.pack("f", float(text)))[0]


__all__ = [
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "INTEGER_BITS",
    "WRAPPER_TO_PRIMITIVE",
    "PRIMITIVE_TO_WRAPPER",
    "linked_type",
    "is_primitive",
    "parse_int",
    "parse_decimal",
    "signed_int_parser",
    "parse_float32",
]
