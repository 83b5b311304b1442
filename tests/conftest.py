"""Shared fixtures: a parsed product page and document adapters that record queries."""

from collections import Counter

import pytest

from domextract.documents import DocumentAdapter, SoupAdapter, load_document
from domextract.transformations.registry import build_default_registry

PRODUCT_PAGE = """
<div id="product" data-sku="SKU-1001">
  <h1 class="title">  Hello World  </h1>
  <span class="price" data-currency="EUR"> 19.50 EUR </span>
  <span class="stock">  42 in stock</span>
  <p class="tags">red,green,blue</p>
  <ul class="features">
    <li>Waterproof</li>
    <li>Lightweight</li>
    <li>Recycled</li>
  </ul>
  <div class="description">Fish &amp; Chips</div>
  <form>
    <input class="qty" name="qty" value="3">
    <textarea class="note">Leave at door</textarea>
    <select class="size">
      <option value="s">Small</option>
      <option value="m" selected>Medium</option>
    </select>
  </form>
</div>
"""


class CountingSoupAdapter(SoupAdapter):
    """SoupAdapter that records every find_one selector."""

    def __init__(self):
        super().__init__()
        self.queries: list[str] = []

    def find_one(self, node, selector):
        self.queries.append(selector)
        return super().find_one(node, selector)


class StubNode:
    def __init__(self, text="", attrs=None, children=None):
        self.text = text
        self.attrs = attrs or {}
        self.children = children or []


class StubAdapter(DocumentAdapter):
    """In-memory document: selectors map straight to nodes."""

    def __init__(self, index):
        self.index = index
        self.calls = Counter()

    def is_node(self, value):
        return isinstance(value, StubNode)

    def find_one(self, node, selector):
        self.calls[selector] += 1
        return self.index.get(selector)

    def find_all(self, node, selector):
        found = self.index.get(selector)
        return [found] if found is not None else []

    def inner_html(self, node):
        return node.text

    def inner_text(self, node):
        return node.text

    def form_value(self, node):
        return node.attrs.get("value")

    def get_attribute(self, node, name):
        return node.attrs.get(name)

    def create_detached(self, markup):
        return StubNode(children=[markup] if markup else [])

    def child_nodes(self, node):
        return node.children

    def node_value(self, node):
        return node if isinstance(node, str) else None


@pytest.fixture
def page():
    return load_document(PRODUCT_PAGE)


@pytest.fixture
def adapter():
    return CountingSoupAdapter()


@pytest.fixture
def registry():
    return build_default_registry()
