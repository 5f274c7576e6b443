"""Generation options for the builder synthesizer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from common import Settings


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    """Switches controlling which members are generated.

    ``create_builder_constructor`` selects the build style: when false the
    enclosing type gets a private constructor consuming the builder and
    ``build()`` delegates to it; when true ``build()`` populates a fresh
    instance directly. ``format_source`` only affects the orchestrator.
    """

    create_builder_constructor: bool = False
    create_static_with_methods: bool = True
    create_copy_constructor: bool = True
    create_builder_getters: bool = False
    create_class_getters: bool = False
    create_class_setters: bool = False
    format_source: bool = True

    @classmethod
    def builder(cls) -> "GenerationOptionsBuilder":
        return GenerationOptionsBuilder()

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "GenerationOptions":
        """Take defaults from ``settings``; non-``None`` overrides win."""
        values = {f.name: getattr(settings, f.name) for f in fields(cls)}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def replace(self, **changes: Any) -> "GenerationOptions":
        return replace(self, **changes)

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


class GenerationOptionsBuilder:
    """Fluent builder for :class:`GenerationOptions`."""

    def __init__(self) -> None:
        self._values: dict[str, bool] = GenerationOptions().as_dict()

    def _set(self, key: str, value: bool) -> "GenerationOptionsBuilder":
        self._values[key] = bool(value)
        return self

    def create_builder_constructor(self, value: bool) -> "GenerationOptionsBuilder":
        return self._set("create_builder_constructor", value)

    def create_static_with_methods(self, value: bool) -> "GenerationOptionsBuilder":
        return self._set("create_static_with_methods", value)

    def create_copy_constructor(self, value: bool) -> "GenerationOptionsBuilder":
        return self._set("create_copy_constructor", value)

    def create_builder_getters(self, value: bool) -> "GenerationOptionsBuilder":
        return self._set("create_builder_getters", value)

    def create_class_getters(self, value: bool) -> "GenerationOptionsBuilder":
        return self._set("create_class_getters", value)

    def create_class_setters(self, value: bool) -> "GenerationOptionsBuilder":
        return self._set("create_class_setters", value)

    def format_source(self, value: bool) -> "GenerationOptionsBuilder":
        return self._set("format_source", value)

    def build(self) -> GenerationOptions:
        return GenerationOptions(**self._values)
