"""envconfig - typed, read-only configuration bound from environment variables.

Declare a schema, bind it once, read typed values:

    from typing import Annotated
    from envconfig import EnvConfig, EnvVar, Int32

    class AppSettings(EnvConfig):
        port: Int32 = 8080
        hosts: list[str]
        limits: Annotated[dict[str, int], EnvVar(name="RATE_LIMITS", default="read:100")]

    settings = AppSettings.from_env("myapp")
    # MYAPP_PORT="9090" MYAPP_HOSTS="a,b" MYAPP_RATE_LIMITS="read:10,write:2"

Packages:
    envconfig.core:    type descriptors, value parsers, ParserRegistry, TypeConverter
    envconfig.models:  EnvConfig, EnvVar, binding and the process-wide config cache
    envconfig.log:     opt-in logging setup
    envconfig.cli:     ``envconfig check`` / ``envconfig names``
"""

import logging

from envconfig.core import (
    ArrayType,
    EnumType,
    Float32,
    Instant,
    Int8,
    Int16,
    Int32,
    Int64,
    LocalDateTime,
    MonthDay,
    OffsetDateTime,
    OffsetTime,
    ParameterizedType,
    ParserRegistry,
    Period,
    SimpleType,
    TypeConverter,
    TypeDescriptor,
    Year,
    YearMonth,
    ZonedDateTime,
    convert,
    describe,
    from_function,
    tokenize,
)
from envconfig.exceptions import (
    BooleanFormatError,
    ConfigBindingError,
    ContainerConversionError,
    ConversionError,
    DateTimeFormatError,
    EnvConfigError,
    FieldFailure,
    IllegalValueError,
    MissingParserError,
    MissingValueError,
    NumberFormatError,
    RegistrationError,
    UnsupportedTypeError,
)
from envconfig.models import (
    EnvConfig,
    EnvVar,
    bind,
    cached_configs,
    clear,
    clear_all,
    from_env,
    from_source,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Models
    "EnvConfig",
    "EnvVar",
    "bind",
    "from_env",
    "from_source",
    "clear",
    "clear_all",
    "cached_configs",
    # Conversion
    "TypeConverter",
    "ParserRegistry",
    "convert",
    "describe",
    "from_function",
    "tokenize",
    "TypeDescriptor",
    "SimpleType",
    "ArrayType",
    "EnumType",
    "ParameterizedType",
    # Types
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
    # Exceptions
    "EnvConfigError",
    "ConversionError",
    "MissingValueError",
    "BooleanFormatError",
    "NumberFormatError",
    "DateTimeFormatError",
    "IllegalValueError",
    "ContainerConversionError",
    "MissingParserError",
    "UnsupportedTypeError",
    "RegistrationError",
    "FieldFailure",
    "ConfigBindingError",
]
