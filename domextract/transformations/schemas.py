"""Transformation schemas.

Every registered transformation declares the ValueKind it accepts. The
registry compares that declaration with classify(value) before running
the transformation, so individual transformations never repeat the check.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from domextract.documents import DocumentAdapter


class ValueKind(str, Enum):
    """Kinds of value that flow through a transformation chain."""

    NODE = "node"
    TEXT = "text"
    NUMBER = "number"
    ARRAY = "array"
    BOOLEAN = "boolean"
    ABSENT = "absent"
    OTHER = "other"
    # Declaration only: accepts every kind
    ANY = "any"


# Value returned when a transformation's input has the wrong kind
INAPPLICABLE = False


def classify(value: Any, document: DocumentAdapter) -> ValueKind:
    """Map a runtime value to its ValueKind.

    bool is checked before int because bool subclasses int, and nodes are
    checked before sequences because some node types are iterable.
    """
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if document.is_node(value):
        return ValueKind.NODE
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.OTHER


class TransformationSummary(BaseModel):
    """Lightweight description of a registry entry for listings."""

    name: str = Field(..., description="Registry name, e.g. 'inner-text'")
    kind: ValueKind = Field(
        ..., description="Value kind the transformation accepts"
    )
    factory: bool = Field(
        default=False,
        description="True when the entry takes static arguments "
        "('split:,:2') and returns the actual transformation",
    )
    parameters: list[str] = Field(
        default_factory=list,
        description="Names of the static arguments a factory accepts",
    )
    description: str = Field(
        default="", description="What the transformation does"
    )
    builtin: bool = Field(
        default=False, description="Part of the standard set"
    )
    source: Optional[str] = Field(
        default=None, description="Qualified name of the implementing function"
    )
