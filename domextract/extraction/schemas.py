"""Field spec schemas.

A configuration maps output keys to FieldSpecs. Plain dicts are accepted
wherever a FieldSpec is and validated on the way in.
"""

from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldSpec(BaseModel):
    """How to derive one output value from the document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    condition: Optional[Callable[[], Any]] = Field(
        default=None,
        description="Zero-argument predicate; a falsy result drops the field "
        "from the output entirely",
    )
    selector: Optional[str] = Field(
        default=None,
        description="Selector resolved against the root node "
        "(e.g. '.title'). Absent or empty means the root node itself.",
    )
    transformations: Optional[list[Any]] = Field(
        default=None,
        description="Ordered chain: registry names ('trim'), compound "
        "descriptors ('split:,:2') or unary callables",
    )

    def is_active(self) -> bool:
        """False when a condition is present and evaluates falsy."""
        return self.condition is None or bool(self.condition())


def coerce_config(config: Mapping[str, Any]) -> dict[str, FieldSpec]:
    """Validate every entry of a configuration into a FieldSpec.

    Raises:
        pydantic.ValidationError: If an entry is not a valid field spec
    """
    return {
        key: spec if isinstance(spec, FieldSpec) else FieldSpec.model_validate(spec)
        for key, spec in config.items()
    }
