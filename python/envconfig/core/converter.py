"""Type-directed conversion of raw strings.

TypeConverter decomposes a type descriptor, picks the parser from its
registry and invokes it, passing itself along so generic parsers can
convert their elements recursively:

    converter = TypeConverter(ParserRegistry().freeze())
    converter.convert(dict[TimeUnit, int], "DAYS:1,HOURS:2")
    → {TimeUnit.DAYS: 1, TimeUnit.HOURS: 2}

Dispatch:
    1. A parser registered for the exact descriptor wins.
    2. SimpleType         → parser for the type, no type arguments
    3. ArrayType          → array parser, component as the type argument
    4. EnumType           → enum parser, the EnumType as the type argument
    5. ParameterizedType  → parser for the raw origin, the descriptor's
                            type arguments passed through unchanged

A descriptor without a parser raises MissingParserError (misconfiguration,
not bad input). Empty strings are normalized to None before dispatch. Any
other exception a parser raises is re-raised as ConversionError, chained
to the original.
"""

from __future__ import annotations

import logging
from typing import Any

from envconfig.core.parsers import ValueParser
from envconfig.core.registry import ParserRegistry
from envconfig.core.types import (
    ARRAY,
    ENUM,
    ArrayType,
    EnumType,
    ParameterizedType,
    SimpleType,
    TypeDescriptor,
    describe,
)
from envconfig.exceptions import (
    ConversionError,
    EnvConfigError,
    MissingParserError,
    UnsupportedTypeError,
)

logger = logging.getLogger(__name__)


class TypeConverter:
    """Converts raw string values into typed values using a ParserRegistry."""

    def __init__(self, registry: ParserRegistry | None = None):
        self.registry = registry if registry is not None else ParserRegistry().freeze()

    def convert(self, target: Any, value: str | None) -> Any:
        """Convert ``value`` to the type described by ``target``.

        Args:
            target: Type descriptor, or an annotation to describe first
            value: Raw value; None or "" means no value

        Raises:
            ConversionError: If the value cannot be read as the target type
            MissingParserError: If no parser is registered for the target
            UnsupportedTypeError: If the target cannot be described
        """
        descriptor = describe(target)
        raw = value or None

        exact = self.registry.parser_for(descriptor)
        if exact is not None and not isinstance(descriptor, SimpleType):
            logger.debug("convert %s: exact parser", descriptor)
            parser, type_args = exact, _type_args(descriptor)
        elif isinstance(descriptor, SimpleType):
            parser, type_args = self._parser(descriptor), ()
        elif isinstance(descriptor, ArrayType):
            parser, type_args = self._parser(ARRAY), (descriptor.component,)
        elif isinstance(descriptor, EnumType):
            parser, type_args = self._parser(ENUM), (descriptor,)
        elif isinstance(descriptor, ParameterizedType):
            parser, type_args = self._parser(descriptor.raw), descriptor.args
        else:
            raise UnsupportedTypeError(f"Unsupported type: {descriptor!r}", hint=descriptor)

        try:
            return parser(raw, self, *type_args)
        except EnvConfigError:
            raise
        except Exception as e:
            # custom parsers fail with plain ValueError, KeyError, ...
            raise ConversionError(
                f"Cannot convert {raw!r} to {descriptor}: {type(e).__name__}: {e}",
                value=raw,
                target=descriptor,
            ) from e

    def _parser(self, key: TypeDescriptor) -> ValueParser[Any]:
        parser = self.registry.parser_for(key)
        if parser is None:
            raise MissingParserError(key)
        return parser


def _type_args(descriptor: TypeDescriptor) -> tuple[TypeDescriptor, ...]:
    if isinstance(descriptor, ArrayType):
        return (descriptor.component,)
    if isinstance(descriptor, EnumType):
        return (descriptor,)
    if isinstance(descriptor, ParameterizedType):
        return descriptor.args
    return ()


def convert(target: Any, value: str | None, registry: ParserRegistry | None = None) -> Any:
    """Convert with a fresh converter over ``registry`` (default: built-ins only)."""
    return TypeConverter(registry).convert(target, value)


__all__ = ["TypeConverter", "convert"]
