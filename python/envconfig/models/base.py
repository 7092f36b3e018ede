"""Base class of declared configuration schemas.

An EnvConfig subclass declares named, typed fields; binding fills every one
of them from a flat string map and the resulting instance is read-only:

    class AppSettings(EnvConfig):
        port: Int32 = 8080
        debug: bool
        tags: list[str] | None = None
        timeout: Annotated[timedelta, EnvVar(default="PT30S")]

    settings = AppSettings.from_env("myapp")   # MYAPP_PORT, MYAPP_DEBUG, ...
    settings.port  → 8080

Instances are built with ``model_construct()``: converted values are stored
as produced (tuples, frozensets, read-only mappings, ctypes arrays) without
a second pydantic validation pass.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Self

from pydantic import BaseModel, ConfigDict

from envconfig.core.registry import ParserRegistry
from envconfig.models import binding
from envconfig.models import registry as cache


class EnvConfig(BaseModel):
    """Frozen pydantic model bound from environment variables."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def from_env(cls, prefix: str | None = None) -> Self:
        """Bind from ``os.environ``; cached per (prefix, class)."""
        return binding.from_env(cls, prefix)

    @classmethod
    def from_source(cls, source: Mapping[str, str], prefix: str | None = None) -> Self:
        """Bind from ``source``; cached per (prefix, class)."""
        return binding.from_source(cls, source, prefix)

    @classmethod
    def bind(
        cls,
        source: Mapping[str, str],
        prefix: str | None = None,
        registry: ParserRegistry | None = None,
    ) -> Self:
        """Bind from ``source`` without touching the cache."""
        return binding.bind(cls, source, prefix, registry)

    @classmethod
    def env_names(cls, prefix: str | None = None) -> dict[str, str]:
        return binding.env_names(cls, prefix)

    @classmethod
    def clear_cached(cls, prefix: str | None = None) -> None:
        cache.clear(cls, prefix)


__all__ = ["EnvConfig"]
