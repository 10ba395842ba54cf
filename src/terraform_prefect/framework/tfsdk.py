"""Attribute value containers: configuration, plan and state.

Adapters move data in and out of these containers through typed pydantic
models, so a null attribute is ``None`` on the model and never an empty string.
"""

from __future__ import annotations

import copy
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from .diagnostics import AttributePath, Diagnostics

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validation_diagnostics(error: ValidationError) -> Diagnostics:
    diags = Diagnostics()
    for item in error.errors():
        steps = tuple(str(step) for step in item.get("loc", ()))
        if steps:
            diags.add_attribute_error(
                AttributePath(steps=steps), "Value Conversion Error", item.get("msg", "")
            )
        else:
            diags.add_error("Value Conversion Error", item.get("msg", ""))
    return diags


class _Values:
    """Attribute values for one block, keyed by attribute name."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values = copy.deepcopy(values) if values is not None else None

    @property
    def raw(self) -> dict[str, Any] | None:
        """A copy of the underlying values, or ``None`` if the block is null."""
        return copy.deepcopy(self._values)

    def is_null(self) -> bool:
        return self._values is None

    def get(self, model_cls: type[ModelT]) -> tuple[ModelT | None, Diagnostics]:
        """Populate a model from the values.

        Returns:
            Tuple of (model or None, diagnostics). The model is None when the
            values could not be converted.
        """
        try:
            return model_cls.model_validate(self._values or {}), Diagnostics()
        except ValidationError as e:
            return None, _validation_diagnostics(e)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


class Config(_Values):
    """Values written by the user in a configuration block."""


class Plan(_Values):
    """Proposed new values for a resource."""


class State(_Values):
    """Persisted values for a resource or data source."""

    def set(self, model: BaseModel) -> Diagnostics:
        """Replace the state with the model's values.

        The previous values are kept if the model cannot be serialized.
        """
        diags = Diagnostics()
        try:
            values = model.model_dump(mode="json")
        except PydanticSerializationError as e:
            diags.add_error(
                "State Write Error",
                f"Could not convert the model into state values, unexpected error: {e}",
            )
            return diags

        self._values = values
        return diags

    def set_attribute(self, name: str, value: Any) -> None:
        if self._values is None:
            self._values = {}
        self._values[name] = value

    def remove_resource(self) -> None:
        """Drop the resource from state so the runtime plans to recreate it."""
        self._values = None


__all__ = ["Config", "Plan", "State"]
