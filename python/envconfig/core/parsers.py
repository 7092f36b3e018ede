"""Value parsers: the unit of conversion and of extensibility.

A value parser is any callable

    parser(value: str | None, converter: TypeConverter, *type_args: TypeDescriptor) -> T

``value`` is ``None`` when there is no value (absent key or empty string).
Parsers for generic types receive the type arguments of the descriptor and
call back into ``converter.convert()`` for each element; parsers for simple
types ignore them.

Helpers:
    from_function(fn, error):
        Adapt a plain ``str -> T`` function. ValueError, TypeError,
        ArithmeticError and LookupError raised by ``fn`` become ``error``.

        from_function(int, NumberFormatError)

Built-in parsers:
    BUILTIN_PARSERS lists (type, parser) pairs the registry is seeded with:
    booleans, numerics, strings, Optional, list/set/array/map containers,
    enums, URLs and every temporal type.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence, Set
from collections.abc import Mapping as AbcMapping
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Optional, Protocol, TypeVar

from pydantic import AnyUrl, HttpUrl, TypeAdapter

from envconfig.core.numeric import (
    INTEGER_BITS,
    Float32,
    is_primitive,
    parse_decimal,
    parse_float32,
    parse_int,
    signed_int_parser,
)
from envconfig.core.temporal import TEMPORAL_PARSERS
from envconfig.core.tokens import ENTRY_SEPARATOR, LIST_SEPARATOR, tokenize
from envconfig.core.types import EnumType, SimpleType, TypeDescriptor
from envconfig.exceptions import (
    BooleanFormatError,
    ContainerConversionError,
    ConversionError,
    DateTimeFormatError,
    IllegalValueError,
    MissingValueError,
    NumberFormatError,
)

if TYPE_CHECKING:
    from envconfig.core.converter import TypeConverter

T = TypeVar("T", covariant=True)

_PARSE_ERRORS = (ValueError, TypeError, ArithmeticError, LookupError)


class ValueParser(Protocol[T]):
    """Callable converting a raw value into a typed value."""

    def __call__(
        self, value: str | None, converter: TypeConverter, *type_args: TypeDescriptor
    ) -> T: ...


def from_function(
    function: Callable[[str], Any],
    error: type[ConversionError] = ConversionError,
    *,
    target: Any = None,
) -> ValueParser[Any]:
    """Build a parser from a ``str -> T`` function, ignoring type arguments."""

    def parse(value: str | None, converter: TypeConverter, *type_args: TypeDescriptor) -> Any:
        text = "" if value is None else value
        try:
            return function(text)
        except _PARSE_ERRORS as e:
            name = getattr(target, "__name__", None) or str(target or "value")
            raise error(
                f"Cannot convert {text!r} to {name}: {e}", value=value, target=target
            ) from e

    parse.__name__ = f"parse_{getattr(function, '__name__', 'value')}"
    return parse


# -------------------- scalars --------------------


def parse_bool(value: str | None, converter: TypeConverter, *type_args: TypeDescriptor) -> bool:
    """Case-insensitive "true"/"false"; anything else is an error, never False."""
    if value is None:
        raise BooleanFormatError("Missing boolean value", value=value, target=bool)
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise BooleanFormatError(f"Invalid boolean, got {value!r}", value=value, target=bool)


def parse_str(value: str | None, converter: TypeConverter, *type_args: TypeDescriptor) -> str:
    if not value:
        raise MissingValueError("Missing value", target=str)
    return value


def parse_enum(value: str | None, converter: TypeConverter, *type_args: TypeDescriptor) -> Enum:
    """Look up an enum member by its exact, case-sensitive name."""
    (descriptor,) = type_args
    enum = descriptor.enum if isinstance(descriptor, EnumType) else descriptor.type
    try:
        return enum[value]
    except KeyError:
        raise IllegalValueError(
            f"No enum constant {enum.__name__}.{value or ''} "
            f"(expected one of: {', '.join(enum.__members__)})",
            value=value,
            target=enum,
        ) from None


def _url_parser(url_type: type) -> ValueParser[Any]:
    adapter = TypeAdapter(url_type)
    return from_function(adapter.validate_python, IllegalValueError, target=url_type)


# -------------------- containers --------------------


def _convert_elements(
    value: str | None, converter: TypeConverter, element_type: TypeDescriptor, container: str
) -> list[Any]:
    """Convert every comma-separated token; the first failure aborts."""
    items = []
    for index, token in enumerate(tokenize(value or "", LIST_SEPARATOR)):
        items.append(_convert_element(converter, element_type, token, value, index, container))
    return items


def _convert_element(
    converter: TypeConverter,
    element_type: TypeDescriptor,
    token: str,
    value: str | None,
    index: int,
    container: str,
) -> Any:
    try:
        return converter.convert(element_type, token)
    except ContainerConversionError:
        raise
    except ConversionError as e:
        raise ContainerConversionError(
            f"Invalid element {index} of {container}: {e}",
            value=value,
            target=container,
            index=index,
        ) from e


def parse_optional(
    value: str | None, converter: TypeConverter, *type_args: TypeDescriptor
) -> Any | None:
    if not value:
        return None
    return converter.convert(type_args[0], value)


def parse_list(
    value: str | None, converter: TypeConverter, *type_args: TypeDescriptor
) -> tuple[Any, ...]:
    """Ordered, immutable: ``"1,2,3"`` → ``(1, 2, 3)``."""
    (element_type,) = type_args
    return tuple(_convert_elements(value, converter, element_type, f"list[{element_type}]"))


def parse_set(
    value: str | None, converter: TypeConverter, *type_args: TypeDescriptor
) -> frozenset[Any]:
    (element_type,) = type_args
    return frozenset(_convert_elements(value, converter, element_type, f"set[{element_type}]"))


def parse_array(value: str | None, converter: TypeConverter, *type_args: TypeDescriptor) -> Any:
    """Fixed-size array; a ``ctypes`` array for primitive components, else a tuple."""
    (component,) = type_args
    items = _convert_elements(value, converter, component, f"tuple[{component}, ...]")
    if isinstance(component, SimpleType) and is_primitive(component.type):
        return (component.type * len(items))(*items)
    return tuple(items)


def parse_map(
    value: str | None, converter: TypeConverter, *type_args: TypeDescriptor
) -> AbcMapping[Any, Any]:
    """``"K:V,K:V"`` → read-only mapping; a repeated key keeps its last value."""
    key_type, value_type = type_args
    container = f"dict[{key_type}, {value_type}]"
    result: dict[Any, Any] = {}
    for index, entry in enumerate(tokenize(value or "", LIST_SEPARATOR)):
        parts = list(tokenize(entry, ENTRY_SEPARATOR))
        if len(parts) != 2:
            raise ContainerConversionError(
                f"Invalid entry {index} of {container}: expected 'key{ENTRY_SEPARATOR}value', "
                f"got {entry!r}",
                value=value,
                target=container,
                index=index,
            )
        key = _convert_element(converter, key_type, parts[0], value, index, container)
        result[key] = _convert_element(converter, value_type, parts[1], value, index, container)
    return MappingProxyType(result)


def _builtin_parsers() -> Iterable[tuple[Any, ValueParser[Any]]]:
    yield bool, parse_bool

    for sized, bits in INTEGER_BITS.items():
        yield sized, from_function(signed_int_parser(bits), NumberFormatError, target=sized)
    yield int, from_function(parse_int, NumberFormatError, target=int)
    yield float, from_function(float, NumberFormatError, target=float)
    yield Float32, from_function(parse_float32, NumberFormatError, target=Float32)
    yield Decimal, from_function(parse_decimal, NumberFormatError, target=Decimal)

    yield str, parse_str

    yield Optional, parse_optional
    yield list, parse_list
    yield Sequence, parse_list
    yield set, parse_set
    yield frozenset, parse_set
    yield Set, parse_set
    yield tuple, parse_array
    yield dict, parse_map
    yield AbcMapping, parse_map

    yield Enum, parse_enum
    yield AnyUrl, _url_parser(AnyUrl)
    yield HttpUrl, _url_parser(HttpUrl)

    for temporal, function in TEMPORAL_PARSERS.items():
        yield temporal, from_function(function, DateTimeFormatError, target=temporal)


BUILTIN_PARSERS: tuple[tuple[Any, ValueParser[Any]], ...] = tuple(_builtin_parsers())


__all__ = [
    "ValueParser",
    "from_function",
    "parse_bool",
    "parse_str",
    "parse_enum",
    "parse_optional",
    "parse_list",
    "parse_set",
    "parse_array",
    "parse_map",
    "BUILTIN_PARSERS",
]
