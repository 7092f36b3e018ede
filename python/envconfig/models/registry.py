"""Process-wide cache of bound configuration objects.

This module maintains a global dict mapping cache keys to configuration
instances, so repeated ``from_env()`` calls return the same object.

Cache Key Format:
    (PREFIX, config_type), e.g. ("MYAPP", AppSettings).
    Prefixes are upper-cased; no prefix is stored as "default".

Functions:
    get_or_create(config_type, prefix, factory) -> EnvConfig:
        Return the cached instance, building it with factory() on first
        access. Concurrent first access builds at most once per key.

    clear(config_type, prefix=None):
        Remove one entry (no-op if not cached).

    clear_all():
        Remove all entries (used in tests for cleanup).

    cached_configs() -> dict[tuple[str, type], EnvConfig]:
        Return copy of the cache.

Concurrency:
    Published entries are read without locking. A miss takes a per-key
    lock (handed out under a short global lock) and checks again before
    building, so only one caller builds and the rest reuse its result.
    A build that raises publishes nothing; the next call tries again.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from envconfig.models.base import EnvConfig

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="EnvConfig")

DEFAULT_NAMESPACE = "default"

_CONFIGS: dict[tuple[str, type], EnvConfig] = {}
_BUILD_LOCKS: dict[tuple[str, type], threading.Lock] = {}
_GUARD = threading.Lock()


def cache_key(config_type: type, prefix: str | None = None) -> tuple[str, type]:
    return (prefix.upper() if prefix else DEFAULT_NAMESPACE, config_type)


def get_or_create(config_type: type[C], prefix: str | None, factory: Callable[[], C]) -> C:
    """Return the cached configuration for (prefix, config_type), building it once."""
    key = cache_key(config_type, prefix)
    config = _CONFIGS.get(key)
    if config is not None:
        return config  # type: ignore[return-value]

    with _GUARD:
        lock = _BUILD_LOCKS.setdefault(key, threading.Lock())

    with lock:
        config = _CONFIGS.get(key)
        if config is None:
            logger.debug("Cache miss for %s[%s], building", config_type.__name__, key[0])
            config = factory()
            _CONFIGS[key] = config
    return config  # type: ignore[return-value]


def clear(config_type: type, prefix: str | None = None) -> None:
    """Remove a cached configuration if present."""
    key = cache_key(config_type, prefix)
    with _GUARD:
        _CONFIGS.pop(key, None)
        _BUILD_LOCKS.pop(key, None)


def clear_all() -> None:
    """Reset the cache (intended for tests)."""
    with _GUARD:
        _CONFIGS.clear()
        _BUILD_LOCKS.clear()


def cached_configs() -> dict[tuple[str, type], EnvConfig]:
    """Return a copy of the cached configurations."""
    return dict(_CONFIGS)


__all__ = [
    "DEFAULT_NAMESPACE",
    "cache_key",
    "get_or_create",
    "clear",
    "clear_all",
    "cached_configs",
]
