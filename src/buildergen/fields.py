"""Field descriptors consumed by the builder synthesizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .errors import DescriptorError


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A field of the enclosing type: storage name and source-level type spelling."""

    name: str
    type: str

    @property
    def is_boolean(self) -> bool:
        return self.type.strip() == "boolean"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FieldDescriptor":
        """Build a descriptor from ``{"name": ..., "type": ...}`` data."""
        if not isinstance(data, Mapping):
            raise DescriptorError(f"Field entry must be a mapping, got {type(data).__name__}.")
        name = data.get("name")
        type_ = data.get("type")
        if not isinstance(name, str) or not name.strip():
            raise DescriptorError(f"Field entry {dict(data)!r} is missing a name.")
        if not isinstance(type_, str) or not type_.strip():
            raise DescriptorError(f"Field '{name}' is missing a type.")
        return cls(name=name.strip(), type=type_.strip())
