"""Binding of string-keyed sources to EnvConfig classes.

bind() walks the declared pydantic fields of a configuration class, resolves
each field's environment variable name and raw value, converts it through a
TypeConverter and constructs the frozen instance:

    settings = bind(AppSettings, os.environ, prefix="myapp")

Raw value resolution (first match wins):
    1. source[env_name]
    2. EnvVar(default="...")   raw string, converted like a source value
    3. pydantic field default  used as-is, not converted

Every field is converted eagerly. Failures of all fields are collected and
raised together as one ConfigBindingError; no partially bound object is ever
returned.

Functions:
    bind(config_type, source, prefix=None, registry=None) -> EnvConfig
    from_env(config_type, prefix=None) -> EnvConfig         (cached)
    from_source(config_type, source, prefix=None) -> EnvConfig  (cached)
    env_names(config_type, prefix=None) -> dict[str, str]
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic.fields import FieldInfo

from envconfig.core.converter import TypeConverter
from envconfig.core.registry import ParserRegistry
from envconfig.exceptions import ConfigBindingError, EnvConfigError, FieldFailure
from envconfig.models import registry as cache
from envconfig.models.field import EnvVar, _extract_env_var, resolve_env_name

if TYPE_CHECKING:
    from envconfig.models.base import EnvConfig

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="EnvConfig")

_NO_DEFAULT = object()


def _default_registry() -> ParserRegistry:
    return ParserRegistry().freeze()


def _field_converter(base: ParserRegistry, env: EnvVar) -> TypeConverter:
    """Converter for one field: the pass registry plus the field's own parsers."""
    if not env.parsers:
        return TypeConverter(base)
    registry = base.copy()
    registry.register_custom(*env.parsers)
    return TypeConverter(registry.freeze())


def _field_default(field_info: FieldInfo) -> Any:
    if field_info.is_required():
        return _NO_DEFAULT
    return field_info.get_default(call_default_factory=True)


def _bind_field(
    field_info: FieldInfo,
    env: EnvVar,
    raw: str | None,
    base: ParserRegistry,
) -> Any:
    if raw is None and env.default is not None:
        raw = env.default
    if raw is None:
        default = _field_default(field_info)
        if default is not _NO_DEFAULT:
            return default

    converter = _field_converter(base, env)
    return converter.convert(field_info.annotation, raw)


def bind(
    config_type: type[C],
    source: Mapping[str, str],
    prefix: str | None = None,
    registry: ParserRegistry | None = None,
) -> C:
    """Bind ``source`` to a new ``config_type`` instance (not cached).

    Args:
        config_type: EnvConfig subclass
        source: Flat string map, e.g. ``os.environ``
        prefix: Variable name prefix (``myapp`` → ``MYAPP_...``)
        registry: Base parser registry (default: built-ins only)

    Raises:
        ConfigBindingError: If any field fails; lists every failing field
    """
    base = registry if registry is not None else _default_registry()
    values: dict[str, Any] = {}
    failures: list[FieldFailure] = []

    for name, field_info in config_type.model_fields.items():
        env = _extract_env_var(field_info)
        env_name = resolve_env_name(prefix, name, env)
        raw = source.get(env_name)
        try:
            values[name] = _bind_field(field_info, env, raw, base)
        except EnvConfigError as e:
            failures.append(FieldFailure(name, env_name, raw, e))

    if failures:
        logger.warning(
            "Failed to bind %s (prefix=%s): %d field(s) failed",
            config_type.__name__,
            prefix,
            len(failures),
        )
        raise ConfigBindingError(config_type, failures)

    logger.info(
        "Bound %s (prefix=%s, %d fields)", config_type.__name__, prefix, len(values)
    )
    return config_type.model_construct(**values)


def from_source(config_type: type[C], source: Mapping[str, str], prefix: str | None = None) -> C:
    """Cached bind(): one instance per (prefix, config_type) for the process."""
    return cache.get_or_create(config_type, prefix, lambda: bind(config_type, source, prefix))


def from_env(config_type: type[C], prefix: str | None = None) -> C:
    """Cached bind() over ``os.environ``."""
    return from_source(config_type, os.environ, prefix)


def env_names(config_type: type[EnvConfig], prefix: str | None = None) -> dict[str, str]:
    """Map each field name to the environment variable it is read from."""
    return {
        name: resolve_env_name(prefix, name, _extract_env_var(field_info))
        for name, field_info in config_type.model_fields.items()
    }


__all__ = ["bind", "from_env", "from_source", "env_names"]
