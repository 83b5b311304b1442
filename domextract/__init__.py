"""domextract - declarative extraction from parsed documents.

A configuration maps output keys to field specs. Each field spec picks a
location in the document with a selector and then runs an ordered chain
of named transformations over it:
- Node transformations (select-one, inner-text, get-attribute, ...)
- Number transformations (to-int, round, multiply-by, ...)
- String transformations (trim, split, replace, match, ...)
- Array transformations (get-index, slice)
"""

from domextract.errors import (
    DomExtractError,
    TransformationArgumentError,
    TransformationConfigError,
    TransformationNotFoundError,
)
from domextract.extraction.extractor import DomExtractor, extract
from domextract.extraction.schemas import FieldSpec
from domextract.transformations.registry import (
    TransformationRegistry,
    build_default_registry,
    get_transformation_registry,
)

__version__ = "0.1.0"

__all__ = [
    "DomExtractError",
    "DomExtractor",
    "FieldSpec",
    "TransformationArgumentError",
    "TransformationConfigError",
    "TransformationNotFoundError",
    "TransformationRegistry",
    "build_default_registry",
    "extract",
    "get_transformation_registry",
]
