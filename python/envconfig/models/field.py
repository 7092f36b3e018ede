"""Per-field binding options and environment variable naming.

EnvVar is attached to a field through ``Annotated`` metadata:

    class AppSettings(EnvConfig):
        db_pool_size: Annotated[int, EnvVar(default="10")]
        auth_url: Annotated[HttpUrl, EnvVar(name="AUTH_SERVICE_URL")]
        colors: Annotated[list[Color], EnvVar(parsers=(parse_color,))]

Options:
    name: Explicit variable name (still prefixed and upper-cased)
    default: Raw string used when the variable is absent; converted like
        any source value
    split_words: Split camelCase field names into words (``myPort`` →
        ``MY_PORT``). Snake_case names are already split.
    parsers: Custom value parsers registered for this field only

Naming:
    resolve_env_name(prefix, field_name, env) → "PREFIX_FIELD_NAME"
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic.fields import FieldInfo

SEPARATOR = "_"

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


@dataclass(frozen=True, slots=True)
class EnvVar:
    """Binding options of a single configuration field."""

    name: str | None = None
    default: str | None = None
    split_words: bool = True
    parsers: tuple[Callable[..., Any], ...] = field(default=())

    def __post_init__(self):
        if self.default is not None and not isinstance(self.default, str):
            raise TypeError(
                f"EnvVar default must be a raw string, got {type(self.default).__name__}"
            )
        if not isinstance(self.parsers, tuple):
            object.__setattr__(self, "parsers", tuple(self.parsers))


DEFAULT_ENV_VAR = EnvVar()


def resolve_env_name(prefix: str | None, field_name: str, env: EnvVar = DEFAULT_ENV_VAR) -> str:
    """Derive the environment variable name of a field.

    Examples:
        resolve_env_name(None, "myPort")               → "MY_PORT"
        resolve_env_name("myapp", "db_pool_size")      → "MYAPP_DB_POOL_SIZE"
        resolve_env_name(None, "myPort", EnvVar(split_words=False))  → "MYPORT"
    """
    if env.name:
        suffix = env.name
    elif env.split_words:
        suffix = _CAMEL_BOUNDARY.sub(rf"\1{SEPARATOR}\2", field_name)
    else:
        suffix = field_name
    name = f"{prefix}{SEPARATOR}{suffix}" if prefix else suffix
    return name.upper()


def _extract_env_var(field_info: FieldInfo) -> EnvVar:
    """Find the EnvVar in a field's ``Annotated`` metadata."""
    for meta in getattr(field_info, "metadata", ()):
        if isinstance(meta, EnvVar):
            return meta
    return DEFAULT_ENV_VAR


__all__ = ["EnvVar", "SEPARATOR", "resolve_env_name"]
