"""Type introspection utilities for annotation parsing.

This module provides helper functions for extracting type information
from Python type hints. Used when describing configuration fields.

Functions:
    _unpack_annotated(hint) -> (base_type, metadata_tuple):
        Extract base type from Annotated[T, ...].
        Returns (hint, ()) if not Annotated.

        Annotated[int, EnvVar(default="8080")]  →  (int, (EnvVar(default="8080"),))

    _type_name(tp) -> str:
        Readable name for error messages and logs.

        Int32            →  "Int32"
        dict[str, int]   →  "dict[str, int]"
"""

from __future__ import annotations

from types import UnionType
from typing import Annotated, Any, NewType, Union, get_args, get_origin


def _unpack_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Extract base type and metadata from Annotated type hint."""
    if get_origin(hint) is Annotated:
        args = get_args(hint)
        if args:
            return args[0], tuple(args[1:])
    return hint, ()


def _is_union(hint: Any) -> bool:
    return get_origin(hint) in (Union, UnionType)


def _is_new_type(hint: Any) -> bool:
    return isinstance(hint, NewType)


def _type_name(tp: Any) -> str:
    if isinstance(tp, type) and not get_args(tp):
        return tp.__name__
    if _is_new_type(tp):
        return tp.__name__
    return str(tp).replace("typing.", "")


__all__ = [
    "_unpack_annotated",
    "_is_union",
    "_is_new_type",
    "_type_name",
]
