"""Extraction interpreter - evaluates field specs against a root node.

For each field whose condition holds:
- start from the root node
- resolve the selector through a per-call memo (one query per selector)
- fold the transformation chain over the selected value

Every chain is resolved before the first query runs, so a configuration
error aborts the call without producing partial output.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from domextract.documents import DocumentAdapter, SoupAdapter
from domextract.errors import TransformationNotFoundError
from domextract.transformations.executor import (
    TransformationChain,
    bind_descriptor,
    parse_descriptor,
    resolve_chain,
    split_descriptor,
)
from domextract.transformations.registry import (
    Transformation,
    TransformationRegistry,
    get_transformation_registry,
)

from .schemas import FieldSpec, coerce_config

logger = logging.getLogger(__name__)


class DomExtractor:
    """Extracts a dict of values from a document subtree.

    Usage:
        extractor = DomExtractor(load_document(html))
        data = extractor.extract({
            "title": {"selector": ".title", "transformations": ["inner-text", "trim"]},
            "price": {"selector": ".price", "transformations": ["inner-text", "to-float"]},
        })
    """

    def __init__(
        self,
        root_node: Any,
        registry: Optional[TransformationRegistry] = None,
        adapter: Optional[DocumentAdapter] = None,
    ):
        """Initialize the extractor.

        Args:
            root_node: Node every selector is resolved against
            registry: TransformationRegistry (default: global built-in set)
            adapter: DocumentAdapter for root_node (default: SoupAdapter)
        """
        self.root_node = root_node
        self.transformations = registry or get_transformation_registry()
        self.adapter = adapter or SoupAdapter()

    def extract(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """Evaluate every active field of config.

        Args:
            config: Output key -> FieldSpec (or dict validated into one)

        Returns:
            Output key -> derived value. Fields whose condition is falsy
            are absent.

        Raises:
            TransformationConfigError: If any chain element cannot be resolved
        """
        specs = coerce_config(config)

        active: dict[str, FieldSpec] = {}
        for key, spec in specs.items():
            if spec.is_active():
                active[key] = spec
            else:
                logger.debug(f"Skipping field '{key}': condition is false")

        chains = {
            key: self.resolve_chain(spec.transformations)
            for key, spec in active.items()
            if spec.transformations
        }

        # Selector -> first match (None included), owned by this call only
        selections: dict[str, Any] = {}
        output: dict[str, Any] = {}
        for key, spec in active.items():
            value = self.root_node
            if spec.selector:
                value = self._select(spec.selector, selections)
            chain = chains.get(key)
            if chain is not None:
                value = chain(value)
            output[key] = value

        logger.debug(
            f"Extracted {len(output)} fields with {len(selections)} distinct queries"
        )
        return output

    def _select(self, selector: str, selections: dict[str, Any]) -> Any:
        if selector in selections:
            logger.debug(f"Selector memo hit: {selector!r}")
        else:
            selections[selector] = self.adapter.find_one(self.root_node, selector)
        return selections[selector]

    def resolve_chain(self, raw_chain: Iterable[Any]) -> TransformationChain:
        """Parse and bind a chain of descriptors against this extractor's registry."""
        return resolve_chain(raw_chain, self.transformations, self.adapter)

    def parse_transformation(self, descriptor: str) -> Transformation:
        """Build the transformation a compound descriptor ("split:,:2") stands for.

        Raises:
            TransformationNotFoundError: If the name is not registered
            TransformationArgumentError: If the arguments do not fit
        """
        name, args = split_descriptor(descriptor)
        entry = self.transformations.get(name)
        if entry is None:
            raise TransformationNotFoundError(name)
        return entry.bind(args, self.adapter)

    def apply_transformations(self, raw_chain: Iterable[Any], item: Any) -> Any:
        """Apply each chain element to item, in series."""
        for raw in raw_chain:
            descriptor = parse_descriptor(raw, self.transformations)
            item = bind_descriptor(descriptor, self.transformations, self.adapter)(item)
        return item


def extract(
    root_node: Any,
    config: Mapping[str, Any],
    registry: Optional[TransformationRegistry] = None,
    adapter: Optional[DocumentAdapter] = None,
) -> dict[str, Any]:
    """Extract config's fields from root_node in a single call."""
    return DomExtractor(root_node, registry=registry, adapter=adapter).extract(config)
