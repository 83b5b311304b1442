"""BeautifulSoup implementation of the document adapter.

Selectors are CSS selectors evaluated by soupsieve through Tag.select_one
and Tag.select.
"""

import logging
import os
from typing import Any, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from .base import DocumentAdapter

logger = logging.getLogger(__name__)

DEFAULT_HTML_PARSER = os.environ.get("DOMEXTRACT_HTML_PARSER", "html.parser")
FRAGMENT_PARSER = "html.parser"


def load_document(markup: str, parser: Optional[str] = None) -> BeautifulSoup:
    """Parse markup into a root node usable with SoupAdapter."""
    return BeautifulSoup(markup, parser or DEFAULT_HTML_PARSER)


class SoupAdapter(DocumentAdapter):
    """Document adapter over bs4 Tags (a BeautifulSoup object is a Tag too)."""

    def __init__(self, parser: Optional[str] = None):
        self.parser = parser or DEFAULT_HTML_PARSER

    def is_node(self, value: Any) -> bool:
        return isinstance(value, Tag)

    def find_one(self, node: Tag, selector: str) -> Optional[Tag]:
        logger.debug(f"select_one({selector!r}) on <{node.name}>")
        return node.select_one(selector)

    def find_all(self, node: Tag, selector: str) -> list[Tag]:
        logger.debug(f"select({selector!r}) on <{node.name}>")
        return list(node.select(selector))

    def inner_html(self, node: Tag) -> str:
        return node.decode_contents()

    def inner_text(self, node: Tag) -> str:
        return node.get_text()

    def form_value(self, node: Tag) -> Optional[str]:
        """Mirror what a browser reports as the element's value.

        input -> value attribute ("" when missing), textarea -> its text,
        option -> value attribute or its text, select -> value of the
        selected option (first option when none is marked).
        """
        if node.name == "input":
            return self.get_attribute(node, "value") or ""
        if node.name == "textarea":
            return node.get_text()
        if node.name == "option":
            value = self.get_attribute(node, "value")
            return value if value is not None else node.get_text()
        if node.name == "select":
            option = node.select_one("option[selected]") or node.select_one("option")
            return self.form_value(option) if option is not None else ""
        return None

    def get_attribute(self, node: Tag, name: str) -> Optional[str]:
        value = node.get(name)
        # Multi-valued attributes such as class come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def create_detached(self, markup: str) -> BeautifulSoup:
        # html.parser adds no <html><body> wrapper, so children are the fragment's own
        return BeautifulSoup(markup, FRAGMENT_PARSER)

    def child_nodes(self, node: Tag) -> list[Any]:
        return list(node.contents)

    def node_value(self, node: Any) -> Optional[str]:
        if isinstance(node, NavigableString):
            return str(node)
        return None
