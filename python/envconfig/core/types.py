"""Type descriptors for the conversion engine.

A type descriptor says what to produce from a raw string. Descriptors are
built once from field annotations by ``describe()`` and never introspected
again at conversion time:

    SimpleType(int)                         int
    ArrayType(SimpleType(c_int32))          tuple[c_int32, ...]
    EnumType(TimeUnit)                      TimeUnit
    ParameterizedType(dict, (K, V))         dict[K, V]
    ParameterizedType(Optional, (T,))       T | None

Registry keys:
    Parsers for parameterized types are registered under the raw origin
    (``SimpleType(list)``), the array parser under ``ARRAY`` and the enum
    parser under ``ENUM``. ``registry_key()`` maps annotations and raw
    origins to these keys.

Rejected shapes:
    ``describe()`` raises UnsupportedTypeError for anything the converter
    cannot handle: Any, TypeVar, forward references, unions other than
    ``T | None``, fixed-length tuples, bare containers, arrays of generic
    components and containers with the wrong number of type arguments.
"""

from __future__ import annotations

import collections.abc
from dataclasses import dataclass
from enum import Enum
from typing import Any, ForwardRef, Optional, TypeVar, get_args, get_origin

from envconfig.core.utils import _is_new_type, _is_union, _type_name, _unpack_annotated
from envconfig.exceptions import UnsupportedTypeError


class TypeDescriptor:
    """Base class of the descriptor variants."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class SimpleType(TypeDescriptor):
    """A non-parameterized type (class, NewType or raw origin)."""

    type: Any

    def __str__(self) -> str:
        if self.type is Optional:
            return "Optional"
        return _type_name(self.type)


@dataclass(frozen=True, slots=True)
class ArrayType(TypeDescriptor):
    """A fixed-size array of a single component type."""

    component: TypeDescriptor

    def __str__(self) -> str:
        return f"tuple[{self.component}, ...]"


@dataclass(frozen=True, slots=True)
class EnumType(TypeDescriptor):
    """A concrete Enum class; members are looked up by name."""

    enum: type[Enum]

    def __str__(self) -> str:
        return self.enum.__name__

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.enum.__members__)


@dataclass(frozen=True, slots=True)
class ParameterizedType(TypeDescriptor):
    """A generic container with its type arguments."""

    origin: Any
    args: tuple[TypeDescriptor, ...]

    def __str__(self) -> str:
        name = "Optional" if self.origin is Optional else _type_name(self.origin)
        return f"{name}[{', '.join(str(arg) for arg in self.args)}]"

    @property
    def raw(self) -> SimpleType:
        return SimpleType(self.origin)


ARRAY = SimpleType(tuple)
ENUM = SimpleType(Enum)
OPTIONAL = SimpleType(Optional)

SEQUENCE_ORIGINS: frozenset[Any] = frozenset(
    {list, set, frozenset, collections.abc.Sequence, collections.abc.Set}
)
MAPPING_ORIGINS: frozenset[Any] = frozenset({dict, collections.abc.Mapping})
RAW_ORIGINS: frozenset[Any] = SEQUENCE_ORIGINS | MAPPING_ORIGINS | {tuple, Optional}


def describe(hint: Any) -> TypeDescriptor:
    """Build a type descriptor from a type annotation.

    Args:
        hint: Annotation such as ``int``, ``list[Int32]``, ``Color | None``

    Returns:
        The matching descriptor variant

    Raises:
        UnsupportedTypeError: If the annotation has no descriptor form
    """
    if isinstance(hint, TypeDescriptor):
        return hint

    hint, _ = _unpack_annotated(hint)

    if hint is Any or isinstance(hint, (TypeVar, ForwardRef, str)):
        raise UnsupportedTypeError(f"Unresolved type: {hint!r}", hint=hint)

    if _is_union(hint):
        return _describe_optional(hint)

    origin = get_origin(hint)
    if origin is not None:
        return _describe_generic(hint, origin)

    if _is_new_type(hint):
        return SimpleType(hint)

    if isinstance(hint, type):
        if hint in RAW_ORIGINS:
            raise UnsupportedTypeError(
                f"Container type {hint.__name__} requires type arguments", hint=hint
            )
        if issubclass(hint, Enum):
            if hint is Enum:
                raise UnsupportedTypeError("Enum requires a concrete subclass", hint=hint)
            return EnumType(hint)
        return SimpleType(hint)

    raise UnsupportedTypeError(f"Unsupported type: {hint!r}", hint=hint)


def _describe_optional(hint: Any) -> TypeDescriptor:
    args = [arg for arg in get_args(hint) if arg is not type(None)]
    if len(args) != 1 or len(args) == len(get_args(hint)):
        raise UnsupportedTypeError(
            f"Only unions with None are supported, got {_type_name(hint)}", hint=hint
        )
    return ParameterizedType(Optional, (describe(args[0]),))


def _describe_generic(hint: Any, origin: Any) -> TypeDescriptor:
    args = get_args(hint)

    if origin is tuple:
        if len(args) != 2 or args[1] is not Ellipsis:
            raise UnsupportedTypeError(
                f"Only variadic tuples (tuple[T, ...]) are supported, got {_type_name(hint)}",
                hint=hint,
            )
        component = describe(args[0])
        if isinstance(component, (ParameterizedType, ArrayType)):
            raise UnsupportedTypeError(
                f"Array component must not be generic, got {component}", hint=hint
            )
        return ArrayType(component)

    if origin in SEQUENCE_ORIGINS:
        expected = 1
    elif origin in MAPPING_ORIGINS:
        expected = 2
    else:
        raise UnsupportedTypeError(f"Unsupported generic type: {_type_name(hint)}", hint=hint)

    if len(args) != expected:
        raise UnsupportedTypeError(
            f"{_type_name(origin)} expects {expected} type argument(s), got {len(args)}",
            hint=hint,
        )
    return ParameterizedType(origin, tuple(describe(arg) for arg in args))


def registry_key(target: Any) -> TypeDescriptor:
    """Return the registry key for a type, raw origin or descriptor.

    Raw origins (``list``, ``dict``, ``Optional``, ``tuple``) and ``Enum``
    are accepted here even though ``describe()`` rejects them, since they
    are the keys container, array and enum parsers are stored under.
    """
    if isinstance(target, TypeDescriptor):
        return target
    try:
        if target in RAW_ORIGINS or target is Enum:
            return SimpleType(target)
    except TypeError:
        pass
    return describe(target)


__all__ = [
    "TypeDescriptor",
    "SimpleType",
    "ArrayType",
    "EnumType",
    "ParameterizedType",
    "ARRAY",
    "ENUM",
    "OPTIONAL",
    "describe",
    "registry_key",
]
