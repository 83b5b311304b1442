"""Exceptions raised by the extraction engine.

Only configuration problems raise. A transformation that receives a value
of the wrong kind returns the inapplicable sentinel (False) instead.
"""

from typing import Any, Optional


class DomExtractError(Exception):
    """Base class for all domextract errors."""


class TransformationConfigError(DomExtractError):
    """A transformation descriptor cannot be turned into a transformation.

    Aborts the whole extraction call; no partial output is returned.
    """

    def __init__(self, name: Any, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Invalid transformation: {name!r}")


class TransformationNotFoundError(TransformationConfigError):
    """Descriptor is not a registered name, a compound descriptor or a callable."""

    def __init__(self, name: Any):
        super().__init__(name, f"Transformation {name!r} not implemented")


class TransformationArgumentError(TransformationConfigError):
    """A registered transformation was given static arguments it cannot take."""

    def __init__(self, name: str, args: tuple, reason: str):
        self.args_given = args
        super().__init__(
            name, f"Transformation {name!r} rejected arguments {list(args)}: {reason}"
        )
