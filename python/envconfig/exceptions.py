"""Exception hierarchy for envconfig.

All envconfig exceptions inherit from EnvConfigError, allowing catch-all handling:

    try:
        settings = AppSettings.from_env("MYAPP")
    except EnvConfigError as e:
        print(f"Configuration error: {e}")

Exception hierarchy:
    EnvConfigError (base)
    ├── ConversionError           - Raw value cannot be read as the target type
    │   ├── MissingValueError         - Empty or absent value where one is required
    │   ├── BooleanFormatError        - Anything other than "true"/"false"
    │   ├── NumberFormatError         - Malformed or out-of-range numeric literal
    │   ├── DateTimeFormatError       - Malformed date, time, duration or zone
    │   ├── IllegalValueError         - Unknown enum member, malformed URL
    │   └── ContainerConversionError  - An element of a list/set/array/map failed
    ├── MissingParserError        - No parser registered for a type (misconfiguration)
    ├── UnsupportedTypeError      - Annotation shape cannot be described
    ├── RegistrationError         - Custom parser cannot be registered
    └── ConfigBindingError        - Aggregated per-field failures of one config class
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class EnvConfigError(Exception):
    """Base exception for all envconfig errors."""


class ConversionError(EnvConfigError, ValueError):
    """Raised when a raw value cannot be converted to its target type."""

    def __init__(self, message: str, *, value: str | None = None, target: Any = None):
        super().__init__(message)
        self.value = value
        self.target = target


class MissingValueError(ConversionError):
    """Raised when a required value is empty or absent."""


class BooleanFormatError(ConversionError):
    """Raised for boolean input other than "true" or "false"."""


class NumberFormatError(ConversionError):
    """Raised when a numeric literal is malformed or out of range."""


class DateTimeFormatError(ConversionError):
    """Raised when a temporal value is malformed."""


class IllegalValueError(ConversionError):
    """Raised when a value is not one of the accepted forms (enum names, URLs)."""


class ContainerConversionError(ConversionError):
    """Raised when a container conversion fails.

    ``index`` is the position of the first failing element (``None`` when the
    container itself is malformed, e.g. a map entry without a separator).
    The element error, if any, is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        value: str | None = None,
        target: Any = None,
        index: int | None = None,
    ):
        super().__init__(message, value=value, target=target)
        self.index = index


class MissingParserError(EnvConfigError, LookupError):
    """Raised when no parser is registered for a type."""

    def __init__(self, target: Any):
        super().__init__(f"No parser registered for: {target}")
        self.target = target


class UnsupportedTypeError(EnvConfigError, TypeError):
    """Raised when a type annotation cannot be turned into a type descriptor."""

    def __init__(self, message: str, *, hint: Any = None):
        super().__init__(message)
        self.hint = hint


class RegistrationError(EnvConfigError):
    """Raised when a custom parser cannot be registered."""


@dataclass(frozen=True, slots=True)
class FieldFailure:
    """One failed field of a configuration class."""

    field: str
    env_name: str
    raw_value: str | None
    error: Exception

    def __str__(self) -> str:
        return f"{self.field} ({self.env_name}): {self.error}"


class ConfigBindingError(EnvConfigError):
    """Raised when one or more fields of a configuration class fail to bind.

    Every failing field is reported, not just the first one.
    """

    def __init__(self, config_type: type, failures: list[FieldFailure]):
        self.config_type = config_type
        self.failures = list(failures)
        lines = "\n".join(f"  - {failure}" for failure in self.failures)
        super().__init__(
            f"Failed to bind {config_type.__name__} "
            f"with {len(self.failures)} error(s):\n{lines}"
        )


__all__ = [
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
