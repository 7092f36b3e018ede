"""Parser registry: type descriptor → value parser.

A registry is seeded with every built-in parser, optionally extended with
custom parsers, then frozen and only read from:

    registry = ParserRegistry()
    registry.register_custom(parse_color)       # produced type from annotations
    registry.freeze()
    TypeConverter(registry).convert(Color, "red")

Keys:
    Parsers are stored under canonical descriptors (see ``registry_key()``).
    Wrapper and primitive types are linked (``Int32`` ↔ ``c_int32``,
    ``float`` ↔ ``c_double``, ...): registering either side registers both.
    Registering a key again overwrites the previous parser, built-in or not.

Custom parsers:
    The produced type of a custom parser is its return annotation. For a
    function it is read from the function itself; for an object with a
    ``parse`` method, from that method:

        def parse_color(value, converter, *type_args) -> Color: ...

        class CommaFreeStr:
            def parse(self, value, converter, *type_args) -> str: ...
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, get_type_hints

from envconfig.core.numeric import linked_type
from envconfig.core.parsers import BUILTIN_PARSERS, ValueParser
from envconfig.core.types import SimpleType, TypeDescriptor, registry_key
from envconfig.exceptions import RegistrationError, UnsupportedTypeError

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Lookup table from type descriptor to value parser."""

    def __init__(self, *, builtins: bool = True):
        self._parsers: dict[TypeDescriptor, ValueParser[Any]] = {}
        self._frozen = False
        if builtins:
            for target, parser in BUILTIN_PARSERS:
                self.register(target, parser)
            logger.debug("Seeded registry with %d built-in parsers", len(self._parsers))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> ParserRegistry:
        """Reject further registration. Returns self for chaining."""
        self._frozen = True
        return self

    def copy(self) -> ParserRegistry:
        """Return an unfrozen registry with the same entries."""
        clone = ParserRegistry(builtins=False)
        clone._parsers = dict(self._parsers)
        return clone

    def register(self, target: Any, parser: ValueParser[Any]) -> None:
        """Store ``parser`` for ``target``, overwriting any previous entry.

        Args:
            target: Type annotation, raw origin (``list``, ``Optional``) or descriptor
            parser: Value parser callable

        Raises:
            RegistrationError: If the registry is frozen or target has no descriptor
        """
        if self._frozen:
            raise RegistrationError(f"Cannot register a parser for {target}: registry is frozen")
        if not callable(parser):
            raise RegistrationError(f"Parser for {target} is not callable: {parser!r}")
        try:
            key = registry_key(target)
        except UnsupportedTypeError as e:
            raise RegistrationError(f"Cannot register a parser for {target!r}: {e}") from e

        self._parsers[key] = parser
        if isinstance(key, SimpleType):
            linked = linked_type(key.type)
            if linked is not None:
                self._parsers[SimpleType(linked)] = parser

    def register_custom(self, *parsers: Any) -> None:
        """Register parsers under the type named by their return annotation.

        Raises:
            RegistrationError: If a produced type cannot be determined
        """
        for parser in parsers:
            produced = produced_type(parser)
            function = _parse_callable(parser)
            self.register(produced, function)
            logger.debug("Registered custom parser %r for %s", parser, registry_key(produced))

    def parser_for(self, target: Any) -> ValueParser[Any] | None:
        """Return the parser for ``target`` or None; never raises."""
        try:
            return self._parsers.get(registry_key(target))
        except (UnsupportedTypeError, TypeError):
            return None

    def __contains__(self, target: Any) -> bool:
        return self.parser_for(target) is not None

    def __len__(self) -> int:
        return len(self._parsers)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<ParserRegistry {len(self._parsers)} parsers, {state}>"


def _parse_callable(parser: Any) -> Any:
    method = getattr(parser, "parse", None)
    if callable(method) and not isinstance(parser, type):
        return method
    return parser


def produced_type(parser: Any) -> Any:
    """Return the type a custom parser produces, from its return annotation.

    Raises:
        RegistrationError: If the annotation is missing or unusable
    """
    if isinstance(parser, type):
        raise RegistrationError(
            f"Expected a parser instance or function, got class {parser.__name__}"
        )
    function = _parse_callable(parser)
    if not callable(function):
        raise RegistrationError(f"Parser is not callable: {parser!r}")
    if inspect.ismethod(function):
        function = function.__func__
    elif not inspect.isfunction(function):
        # callable object without a parse method
        function = type(function).__call__

    try:
        hints = get_type_hints(function)
    except Exception as e:
        raise RegistrationError(
            f"Failed to resolve return type of custom parser {parser!r}: {e}"
        ) from e

    produced = hints.get("return")
    if produced is None or produced is type(None) or produced is Any:
        raise RegistrationError(
            f"Failed to find return type of custom parser {parser!r}; "
            "annotate the return type of the parser"
        )
    try:
        registry_key(produced)
    except UnsupportedTypeError as e:
        raise RegistrationError(f"Unsupported return type of custom parser {parser!r}: {e}") from e
    return produced


__all__ = ["ParserRegistry", "produced_type"]
