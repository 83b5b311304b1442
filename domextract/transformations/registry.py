"""Transformation registry - named, composable unary transformations.

Follows the definitions-registry pattern:
- In-memory dict keyed by transformation name
- Lazy loading of the built-in set with a _loaded guard
- register/unregister for host extensions
- Global default instance via get_transformation_registry()

The global instance is only ever read by the engine. Hosts that add
their own transformations do so on a copy (or a fresh registry) and pass
it to the extractor, so extractors never interfere with each other.
"""

import functools
import inspect
import logging
import re
from typing import Any, Callable, Optional

from domextract.documents import DocumentAdapter
from domextract.errors import TransformationArgumentError

from .schemas import INAPPLICABLE, TransformationSummary, ValueKind, classify

logger = logging.getLogger(__name__)

Transformation = Callable[[Any], Any]


def _fold_surplus_args(args: tuple, signature: inspect.Signature) -> tuple:
    """Rejoin descriptor arguments that were split on a ':' they contained.

    "select-one:li:first-child" arrives as ("li", "first-child") for a
    one-parameter factory. Surplus pieces are joined back into the first
    argument, which is the selector, pattern or delimiter in every
    built-in factory.

    An empty trailing argument for an optional parameter counts as
    absent. When everything before it is empty too, the pieces are the
    remains of a ':' first argument, so "split::" splits on ':'.
    """
    if any(p.kind is p.VAR_POSITIONAL for p in signature.parameters.values()):
        return args
    positional = [
        p for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if not positional:
        return args
    if len(args) > len(positional):
        surplus = len(args) - len(positional) + 1
        args = (":".join(args[:surplus]),) + tuple(args[surplus:])

    required = sum(1 for p in positional if p.default is p.empty)
    while len(args) > max(required, 1) and args[-1] == "":
        if required <= 1 and not any(args[:-1]):
            return (":".join(args),)
        args = args[:-1]
    return args


class TransformationEntry:
    """One registered transformation and how to apply it.

    func is either the transformation itself or, when factory is True, a
    callable taking the static arguments and returning the
    transformation. Transformations registered with uses_document=True
    are called as func(value, document).
    """

    __slots__ = ("name", "func", "kind", "factory", "uses_document", "description", "builtin")

    def __init__(
        self,
        name: str,
        func: Callable[..., Any],
        kind: ValueKind = ValueKind.ANY,
        factory: bool = False,
        uses_document: bool = False,
        description: str = "",
        builtin: bool = False,
    ):
        self.name = name
        self.func = func
        self.kind = kind
        self.factory = factory
        self.uses_document = uses_document
        self.description = description
        self.builtin = builtin

    @property
    def parameters(self) -> list[str]:
        if not self.factory:
            return []
        return list(inspect.signature(self.func).parameters)

    def bind(self, args: tuple, document: DocumentAdapter) -> Transformation:
        """Build the guarded unary transformation for these static arguments.

        Raises:
            TransformationArgumentError: If the arguments do not fit
        """
        if self.factory:
            signature = inspect.signature(self.func)
            args = _fold_surplus_args(args, signature)
            try:
                signature.bind(*args)
            except TypeError as e:
                raise TransformationArgumentError(self.name, args, str(e)) from e
            try:
                func = self.func(*args)
            except (ValueError, re.error) as e:
                raise TransformationArgumentError(self.name, args, str(e)) from e
        elif args:
            raise TransformationArgumentError(
                self.name, args, "transformation takes no arguments"
            )
        else:
            func = self.func

        if self.uses_document:
            func = functools.partial(func, document=document)
        return self._guard(func, document)

    def _guard(self, func: Callable[[Any], Any], document: DocumentAdapter) -> Transformation:
        kind = self.kind
        if kind is ValueKind.ANY:
            return func

        def guarded(value: Any) -> Any:
            value_kind = classify(value, document)
            # Node transformations pass an absent node straight through
            if kind is ValueKind.NODE and value_kind is ValueKind.ABSENT:
                return None
            if value_kind is not kind:
                return INAPPLICABLE
            return func(value)

        guarded.__name__ = f"{self.name}_guarded"
        return guarded

    def summary(self) -> TransformationSummary:
        return TransformationSummary(
            name=self.name,
            kind=self.kind,
            factory=self.factory,
            parameters=self.parameters,
            description=self.description,
            builtin=self.builtin,
            source=f"{getattr(self.func, '__module__', '')}.{getattr(self.func, '__qualname__', type(self.func).__name__)}",
        )


class TransformationRegistry:
    """Registry of named transformations.

    Usage:
        registry = get_transformation_registry().copy()

        @registry.register("slugify", kind=ValueKind.TEXT)
        def slugify(text):
            return text.lower().replace(" ", "-")
    """

    def __init__(self, include_builtins: bool = True):
        self.include_builtins = include_builtins
        self._entries: dict[str, TransformationEntry] = {}
        self._loaded = False

    def load(self) -> None:
        """Register the built-in transformations."""
        if self._loaded:
            return
        # Flag first: register() calls back into load()
        self._loaded = True

        if self.include_builtins:
            from .builtins import register_builtins

            register_builtins(self)
            logger.debug(f"Loaded {len(self._entries)} built-in transformations")

    def register(
        self,
        name: str,
        func: Optional[Callable[..., Any]] = None,
        *,
        kind: ValueKind = ValueKind.ANY,
        factory: bool = False,
        uses_document: bool = False,
        description: str = "",
        builtin: bool = False,
    ):
        """Register a transformation under name.

        Can be called directly or used as a decorator when func is omitted.
        Registering an existing name replaces the previous entry.
        """
        if func is None:
            def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
                self.register(
                    name,
                    f,
                    kind=kind,
                    factory=factory,
                    uses_document=uses_document,
                    description=description,
                    builtin=builtin,
                )
                return f

            return decorator

        self.load()
        if ":" in name:
            raise ValueError(f"Transformation name may not contain ':': {name!r}")
        if name in self._entries:
            logger.warning(f"Replacing registered transformation: {name}")

        self._entries[name] = TransformationEntry(
            name,
            func,
            kind=kind,
            factory=factory,
            uses_document=uses_document,
            description=description or (inspect.getdoc(func) or "").split("\n")[0],
            builtin=builtin,
        )
        logger.debug(f"Registered transformation: {name}")
        return func

    def unregister(self, name: str) -> bool:
        """Remove a transformation. Returns False if it was not registered."""
        self.load()
        if name not in self._entries:
            return False
        del self._entries[name]
        logger.debug(f"Unregistered transformation: {name}")
        return True

    def get(self, name: str) -> Optional[TransformationEntry]:
        """Get an entry by name."""
        self.load()
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        self.load()
        return isinstance(name, str) and name in self._entries

    def list_keys(self) -> list[str]:
        """List all registered names."""
        self.load()
        return sorted(self._entries.keys())

    def count(self) -> int:
        """Get total number of registered transformations."""
        self.load()
        return len(self._entries)

    def list_summaries(self, kind: Optional[ValueKind] = None) -> list[TransformationSummary]:
        """List entry summaries, optionally only those accepting kind."""
        self.load()
        entries = self._entries.values()
        if kind is not None:
            entries = [e for e in entries if e.kind == kind]
        return [e.summary() for e in sorted(entries, key=lambda e: e.name)]

    def copy(self) -> "TransformationRegistry":
        """Independent registry holding the same entries."""
        self.load()
        clone = TransformationRegistry(include_builtins=False)
        clone._entries = dict(self._entries)
        clone._loaded = True
        return clone

    def reload(self) -> None:
        """Drop all entries, including host registrations, and reload built-ins."""
        self._loaded = False
        self._entries.clear()
        self.load()


def build_default_registry() -> TransformationRegistry:
    """Create a new registry holding the built-in transformations."""
    registry = TransformationRegistry()
    registry.load()
    return registry


# Global registry instance
_registry: Optional[TransformationRegistry] = None


def get_transformation_registry() -> TransformationRegistry:
    """Get the global transformation registry instance."""
    global _registry
    if _registry is None:
        _registry = build_default_registry()
        logger.info(f"Loaded {_registry.count()} transformations")
    return _registry
