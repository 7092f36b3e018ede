"""Conversion engine: type descriptors, parsers, registry and converter."""

from envconfig.core.converter import TypeConverter, convert
from envconfig.core.numeric import Float32, Int8, Int16, Int32, Int64
from envconfig.core.parsers import ValueParser, from_function
from envconfig.core.registry import ParserRegistry, produced_type
from envconfig.core.temporal import (
    Instant,
    LocalDateTime,
    MonthDay,
    OffsetDateTime,
    OffsetTime,
    Period,
    Year,
    YearMonth,
    ZonedDateTime,
)
from envconfig.core.tokens import ENTRY_SEPARATOR, LIST_SEPARATOR, Tokens, tokenize
from envconfig.core.types import (
    ArrayType,
    EnumType,
    ParameterizedType,
    SimpleType,
    TypeDescriptor,
    describe,
)

__all__ = [
    "TypeConverter",
    "convert",
    "ParserRegistry",
    "produced_type",
    "ValueParser",
    "from_function",
    "TypeDescriptor",
    "SimpleType",
    "ArrayType",
    "EnumType",
    "ParameterizedType",
    "describe",
    "Tokens",
    "tokenize",
    "LIST_SEPARATOR",
    "ENTRY_SEPARATOR",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "LocalDateTime",
    "OffsetDateTime",
    "ZonedDateTime",
    "Instant",
    "OffsetTime",
    "Period",
    "Year",
    "YearMonth",
    "MonthDay",
]
