"""Declared configuration schemas and their binding.

Classes:
    EnvConfig: Frozen pydantic base model. Provides:
        - from_env(prefix): cached binding from os.environ
        - from_source(source, prefix): cached binding from any string map
        - bind(source, prefix, registry): uncached binding
        - env_names(prefix): field name → environment variable name

    EnvVar: Per-field options attached through ``Annotated``:
        - name: Explicit variable name
        - default: Raw default string
        - split_words: Split camelCase field names
        - parsers: Field-local custom parsers

Config Cache:
    get_or_create(): Build once per (prefix, class).
    clear(): Remove one cached configuration.
    clear_all(): Remove all cached configurations.
    cached_configs(): Get dict of all cached configurations.

Example:
    from envconfig import EnvConfig, EnvVar, Int32

    class ServerSettings(EnvConfig):
        port: Int32 = 8080
        bind_address: Annotated[str, EnvVar(name="LISTEN_ADDR", default="0.0.0.0")]

    settings = ServerSettings.from_env("server")   # SERVER_PORT, SERVER_LISTEN_ADDR
"""

from .base import EnvConfig
from .binding import bind, env_names, from_env, from_source
from .field import EnvVar, resolve_env_name
from .registry import cached_configs, clear, clear_all, get_or_create

__all__ = [
    "EnvConfig",
    "EnvVar",
    "bind",
    "from_env",
    "from_source",
    "env_names",
    "resolve_env_name",
    "get_or_create",
    "clear",
    "clear_all",
    "cached_configs",
]
