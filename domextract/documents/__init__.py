"""Document adapters.

The engine never touches a parsed tree directly. Everything it needs
(querying, reading node content, building scratch fragments) goes
through a DocumentAdapter, with SoupAdapter as the BeautifulSoup default.
"""

from .base import DocumentAdapter
from .soup import DEFAULT_HTML_PARSER, SoupAdapter, load_document

__all__ = ["DEFAULT_HTML_PARSER", "DocumentAdapter", "SoupAdapter", "load_document"]
