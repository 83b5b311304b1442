"""Capabilities the extraction engine needs from a document implementation."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class DocumentAdapter(ABC):
    """Bridge between the engine and a concrete tree implementation.

    Subclasses decide what counts as a node and how selectors are
    evaluated. The engine treats nodes as opaque values.
    """

    @abstractmethod
    def is_node(self, value: Any) -> bool:
        """Whether value is a node of this document implementation."""

    @abstractmethod
    def find_one(self, node: Any, selector: str) -> Optional[Any]:
        """First descendant of node matching selector, or None."""

    @abstractmethod
    def find_all(self, node: Any, selector: str) -> list[Any]:
        """All descendants of node matching selector, in document order."""

    @abstractmethod
    def inner_html(self, node: Any) -> str:
        """Markup of the node's children."""

    @abstractmethod
    def inner_text(self, node: Any) -> str:
        """Text content of the node."""

    @abstractmethod
    def form_value(self, node: Any) -> Optional[str]:
        """Form value of the node, None for elements without one."""

    @abstractmethod
    def get_attribute(self, node: Any, name: str) -> Optional[str]:
        """Attribute value, None when the attribute is missing."""

    @abstractmethod
    def create_detached(self, markup: str) -> Any:
        """Container node holding parsed markup, not attached to any document."""

    @abstractmethod
    def child_nodes(self, node: Any) -> list[Any]:
        """Direct children of node, text nodes included."""

    @abstractmethod
    def node_value(self, node: Any) -> Optional[str]:
        """Text of a text or comment node; None for elements."""
