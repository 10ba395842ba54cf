"""Schema declarations for the provider, data sources and resources.

Public API (the "studs"):
    AttributeType: Value types an attribute can hold
    Attribute: One attribute declaration
    Schema: Attribute set plus description for one block type
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from .diagnostics import AttributePath, Diagnostics


class AttributeType(str, Enum):
    """Value types supported by attribute declarations."""

    STRING = "string"
    BOOL = "bool"
    INT64 = "int64"
    FLOAT64 = "float64"
    LIST_STRING = "list(string)"
    MAP_STRING = "map(string)"


_PYTHON_TYPES: dict[AttributeType, tuple[type, ...]] = {
    AttributeType.STRING: (str,),
    AttributeType.BOOL: (bool,),
    AttributeType.INT64: (int,),
    AttributeType.FLOAT64: (int, float),
    AttributeType.LIST_STRING: (list, tuple),
    AttributeType.MAP_STRING: (dict,),
}


class Attribute(BaseModel):
    """Declaration of a single attribute.

    Attributes:
        type: Value type
        description: Human-readable description shown in docs
        required: Must be set in configuration
        optional: May be set in configuration
        computed: Filled in by the provider
        sensitive: Value is masked in CLI output and plans
    """

    type: AttributeType = Field(AttributeType.STRING, description="Value type")
    description: str = Field(default="", description="Attribute description")
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_flags(self) -> Attribute:
        """Enforce the required/optional/computed combinations the runtime accepts."""
        if self.required and (self.optional or self.computed):
            raise ValueError("required attributes cannot also be optional or computed")
        if not (self.required or self.optional or self.computed):
            raise ValueError("attribute must be required, optional or computed")
        return self

    def accepts(self, value: Any) -> bool:
        """Whether a configuration value has the declared type. ``None`` is always null."""
        if value is None:
            return True
        if self.type != AttributeType.BOOL and isinstance(value, bool):
            return False
        return isinstance(value, _PYTHON_TYPES[self.type])


class Schema(BaseModel):
    """Attribute set for one provider, data source or resource type."""

    description: str = Field(default="", description="Block description")
    attributes: dict[str, Attribute] = Field(default_factory=dict)
    version: int = Field(default=0, ge=0, description="State schema version")

    def validate_config(self, values: dict[str, Any]) -> Diagnostics:
        """Check configuration values against the declarations.

        Unknown attributes, missing required attributes, values set on
        computed-only attributes and type mismatches are each reported as an
        attribute error.
        """
        diags = Diagnostics()

        for name in values:
            if name not in self.attributes:
                diags.add_attribute_error(
                    AttributePath.root(name),
                    "Unsupported argument",
                    f'An argument named "{name}" is not expected here.',
                )

        for name, attribute in self.attributes.items():
            value = values.get(name)
            path = AttributePath.root(name)

            if attribute.required and value is None:
                diags.add_attribute_error(
                    path,
                    "Missing required argument",
                    f'The argument "{name}" is required, but no definition was found.',
                )
            elif value is not None and attribute.computed and not attribute.optional:
                diags.add_attribute_error(
                    path,
                    "Invalid configuration for read-only attribute",
                    f'Cannot set value for this attribute as the provider will fill it: "{name}".',
                )
            elif not attribute.accepts(value):
                diags.add_attribute_error(
                    path,
                    "Incorrect attribute value type",
                    f'Inappropriate value for attribute "{name}": {attribute.type.value} required.',
                )

        return diags

    def sensitive_attributes(self) -> set[str]:
        return {name for name, attr in self.attributes.items() if attr.sensitive}


__all__ = ["AttributeType", "Attribute", "Schema"]
