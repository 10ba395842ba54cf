"""Diagnostics returned to the host runtime instead of raised exceptions.

Public API (the "studs"):
    Severity: Diagnostic severity levels
    AttributePath: Path to the attribute a diagnostic is about
    Diagnostic: A single user-facing error or warning
    Diagnostics: Ordered collection of diagnostics for one operation
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Diagnostic severity values."""

    ERROR = "error"
    WARNING = "warning"


class AttributePath(BaseModel):
    """Path to an attribute in a schema, e.g. ``account_id`` or ``api_key.id``."""

    steps: tuple[str, ...] = Field(
        default_factory=tuple, description="Attribute names from the root"
    )

    model_config = {"frozen": True}

    @classmethod
    def root(cls, name: str) -> AttributePath:
        return cls(steps=(name,))

    def at_name(self, name: str) -> AttributePath:
        return AttributePath(steps=(*self.steps, name))

    def __str__(self) -> str:
        return ".".join(self.steps)


class Diagnostic(BaseModel):
    """A structured error or warning for the user."""

    severity: Severity = Field(..., description="Error or warning")
    summary: str = Field(..., description="Short description of the problem")
    detail: str = Field(default="", description="Longer explanation")
    attribute: AttributePath | None = Field(default=None, description="Offending attribute, if any")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        prefix = f"{self.severity.value.capitalize()}: {self.summary}"
        if self.attribute is not None:
            prefix = f"{prefix} (attribute: {self.attribute})"
        return f"{prefix}\n  {self.detail}" if self.detail else prefix


class Diagnostics:
    """Ordered collection of diagnostics produced by one operation."""

    def __init__(self, items: Iterable[Diagnostic] | None = None) -> None:
        self._items: list[Diagnostic] = list(items or [])

    def add_error(self, summary: str, detail: str = "") -> None:
        self._items.append(Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail))

    def add_warning(self, summary: str, detail: str = "") -> None:
        self._items.append(Diagnostic(severity=Severity.WARNING, summary=summary, detail=detail))

    def add_attribute_error(self, path: AttributePath, summary: str, detail: str = "") -> None:
        self._items.append(
            Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail, attribute=path)
        )

    def add_attribute_warning(self, path: AttributePath, summary: str, detail: str = "") -> None:
        self._items.append(
            Diagnostic(severity=Severity.WARNING, summary=summary, detail=detail, attribute=path)
        )

    def append(self, other: Iterable[Diagnostic]) -> None:
        """Append every diagnostic from another collection."""
        self._items.extend(other)

    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self._items)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.WARNING]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"


__all__ = ["Severity", "AttributePath", "Diagnostic", "Diagnostics"]
