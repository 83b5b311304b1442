"""The standard transformation set.

Four groups, by the kind of value they accept:
- node: select-one, select-all, inner-html, inner-text, value, get-attribute
- number: to-int, to-float, round, multiply-by
- string: html-to-text, to-string, trim, split, replace, match
- array: get-index, slice

Kind checks happen in the registry, so the functions below only ever see
input of the kind they were registered for. Factories receive their
static arguments as strings when they come from a compound descriptor
("split:,:2"), and parse them when the factory is built.
"""

import math
from typing import Any, Callable, Optional

from domextract.documents import DocumentAdapter

from .coercion import is_number, parse_float, parse_int, to_text
from .patterns import compile_pattern
from .schemas import INAPPLICABLE, ValueKind

_BUILTINS: list[tuple[str, Callable[..., Any], dict[str, Any]]] = []


def _builtin(name: str, kind: ValueKind = ValueKind.ANY, **options: Any):
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        _BUILTINS.append((name, func, dict(kind=kind, **options)))
        return func

    return decorator


def register_builtins(registry) -> None:
    """Register the standard set on registry."""
    for name, func, options in _BUILTINS:
        registry.register(name, func, builtin=True, **options)


def _int_arg(value: Any, name: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_int(str(value))
    if number is None:
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return number


def _number_arg(value: Any, name: str) -> float:
    if is_number(value):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


# ── Node transformations ─────────────────────────────────


@_builtin("select-one", ValueKind.NODE, factory=True, uses_document=True)
def select_one(selector: str):
    """First descendant matching the selector."""

    def transform(node: Any, document: DocumentAdapter) -> Optional[Any]:
        return document.find_one(node, selector)

    return transform


@_builtin("select-all", ValueKind.NODE, factory=True, uses_document=True)
def select_all(selector: str):
    """All descendants matching the selector, as a list."""

    def transform(node: Any, document: DocumentAdapter) -> list[Any]:
        return document.find_all(node, selector)

    return transform


@_builtin("inner-html", ValueKind.NODE, uses_document=True)
def inner_html(node: Any, document: DocumentAdapter) -> str:
    """Markup of the node's children."""
    return document.inner_html(node)


@_builtin("inner-text", ValueKind.NODE, uses_document=True)
def inner_text(node: Any, document: DocumentAdapter) -> str:
    """Text content of the node."""
    return document.inner_text(node)


@_builtin("value", ValueKind.NODE, uses_document=True)
def value(node: Any, document: DocumentAdapter) -> Optional[str]:
    """Form value of an input, textarea, select or option."""
    return document.form_value(node)


@_builtin("get-attribute", ValueKind.NODE, factory=True, uses_document=True)
def get_attribute(name: str):
    """Attribute value, None when missing."""

    def transform(node: Any, document: DocumentAdapter) -> Optional[str]:
        return document.get_attribute(node, name)

    return transform


# ── Number transformations ───────────────────────────────


@_builtin("to-int", ValueKind.TEXT)
def to_int(text: str):
    """Leading integer of the text, NaN when there is none."""
    number = parse_int(text)
    return math.nan if number is None else number


@_builtin("to-float", ValueKind.TEXT)
def to_float(text: str):
    """Leading decimal number of the text, NaN when there is none."""
    number = parse_float(text)
    return math.nan if number is None else number


@_builtin("round", ValueKind.NUMBER)
def round_half_up(number: float):
    """Round to the nearest integer, halves toward positive infinity."""
    if not math.isfinite(number):
        return number
    return math.floor(number + 0.5)


@_builtin("multiply-by", ValueKind.NUMBER, factory=True)
def multiply_by(factor: Any):
    """Multiply by a static factor."""
    factor = _number_arg(factor, "factor")

    def transform(number: float) -> float:
        return factor * number

    return transform


# ── String transformations ───────────────────────────────


@_builtin("html-to-text", uses_document=True)
def html_to_text(markup: Any, document: DocumentAdapter) -> str:
    """Decode markup through a detached container and read its first child's text.

    Markup that produces no child yields "".
    """
    container = document.create_detached(markup if isinstance(markup, str) else to_text(markup))
    children = document.child_nodes(container)
    if not children:
        return ""
    return to_text(document.node_value(children[0]))


@_builtin("to-string")
def to_string(item: Any) -> str:
    """Coerce any value to text."""
    return to_text(item)


@_builtin("trim", ValueKind.TEXT)
def trim(text: str) -> str:
    """Strip leading and trailing whitespace."""
    return text.strip()


@_builtin("split", ValueKind.TEXT, factory=True)
def split(delimiter: str, limit: Any = None):
    """Split on a literal delimiter, keeping at most limit pieces."""
    max_pieces = None if limit is None else _int_arg(limit, "limit")

    def transform(text: str) -> list[str]:
        pieces = list(text) if delimiter == "" else text.split(delimiter)
        if max_pieces is not None and max_pieces >= 0:
            pieces = pieces[:max_pieces]
        return pieces

    return transform


@_builtin("replace", ValueKind.TEXT, factory=True)
def replace(pattern: str, replacement: str):
    """Replace a literal substring or /regex/flags match."""
    compiled = compile_pattern(pattern)

    def transform(text: str) -> str:
        return compiled.replace(text, replacement)

    return transform


@_builtin("match", ValueKind.TEXT, factory=True)
def match(pattern: str):
    """Match a literal substring or /regex/flags; None when nothing matches."""
    compiled = compile_pattern(pattern)

    def transform(text: str) -> Optional[list]:
        return compiled.match(text)

    return transform


# ── Array transformations ────────────────────────────────


@_builtin("get-index", ValueKind.ARRAY, factory=True)
def get_index(index: Any):
    """Item at index; False when out of range."""
    position = _int_arg(index, "index")

    def transform(array: list) -> Any:
        if 0 <= position < len(array):
            return array[position]
        return INAPPLICABLE

    return transform


# No kind guard: non-sliceable input raises TypeError
@_builtin("slice", factory=True)
def slice_(start: Any, stop: Any = None):
    """Slice from start up to (not including) stop."""
    begin = _int_arg(start, "start")
    end = None if stop is None else _int_arg(stop, "stop")

    def transform(array: Any) -> Any:
        return array[begin:end]

    return transform
