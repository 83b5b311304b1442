"""Transformation descriptors and chain execution.

A chain element in a field spec is one of:
- a bare registry name: "trim"
- a compound descriptor: "split:,:2" (name, then ':'-separated arguments)
- a unary callable supplied inline

Each element is resolved once into a ByName, ByNameWithArgs or Inline
descriptor, then bound against the registry into a callable. Running the
chain is a left fold over the bound callables.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

from domextract.documents import DocumentAdapter
from domextract.errors import TransformationNotFoundError

from .registry import Transformation, TransformationRegistry

logger = logging.getLogger(__name__)

SEPARATOR = ":"


@dataclass(frozen=True)
class ByName:
    name: str


@dataclass(frozen=True)
class ByNameWithArgs:
    name: str
    args: tuple[str, ...]


@dataclass(frozen=True)
class Inline:
    func: Callable[[Any], Any]


Descriptor = Union[ByName, ByNameWithArgs, Inline]


def split_descriptor(text: str) -> tuple[str, tuple[str, ...]]:
    """Split "name:arg0:arg1" into its name and positional string arguments.

    Arguments are neither trimmed nor converted.
    """
    name, _, remainder = text.partition(SEPARATOR)
    return name, tuple(remainder.split(SEPARATOR))


def parse_descriptor(raw: Any, registry: TransformationRegistry) -> Descriptor:
    """Decide which kind of descriptor a chain element is.

    Resolution order: exact registry name, compound string, callable.

    Raises:
        TransformationNotFoundError: If none of them applies, or a compound
            descriptor names an unregistered transformation
    """
    if isinstance(raw, str):
        if raw in registry:
            return ByName(raw)
        if SEPARATOR in raw:
            name, args = split_descriptor(raw)
            if name not in registry:
                raise TransformationNotFoundError(name)
            return ByNameWithArgs(name, args)
        raise TransformationNotFoundError(raw)
    if callable(raw):
        return Inline(raw)
    raise TransformationNotFoundError(raw)


def bind_descriptor(
    descriptor: Descriptor,
    registry: TransformationRegistry,
    document: DocumentAdapter,
) -> Transformation:
    """Turn a descriptor into the unary callable it stands for."""
    if isinstance(descriptor, Inline):
        return descriptor.func
    entry = registry.get(descriptor.name)
    if entry is None:
        # Unregistered after parsing
        raise TransformationNotFoundError(descriptor.name)
    args = descriptor.args if isinstance(descriptor, ByNameWithArgs) else ()
    return entry.bind(args, document)


class TransformationChain:
    """An ordered, already-bound sequence of transformations."""

    def __init__(self, steps: list[tuple[Descriptor, Transformation]]):
        self.steps = steps

    @property
    def descriptors(self) -> list[Descriptor]:
        return [descriptor for descriptor, _ in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __call__(self, value: Any) -> Any:
        for _, transformation in self.steps:
            value = transformation(value)
        return value


def resolve_chain(
    raw_chain: Iterable[Any],
    registry: TransformationRegistry,
    document: DocumentAdapter,
) -> TransformationChain:
    """Parse and bind every element of a chain.

    Raises:
        TransformationConfigError: On the first element that cannot be resolved
    """
    steps = []
    for raw in raw_chain:
        descriptor = parse_descriptor(raw, registry)
        steps.append((descriptor, bind_descriptor(descriptor, registry, document)))
    logger.debug(f"Resolved chain of {len(steps)} transformations")
    return TransformationChain(steps)
