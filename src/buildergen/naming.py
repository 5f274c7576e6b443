"""Naming conventions used to derive parameter and accessor identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from common.config import DEFAULT_FIELD_PREFIXES

from .fields import FieldDescriptor


class NamingPolicy(Protocol):
    """Protocol describing how generated identifiers are derived from fields."""

    def base_name(self, field_name: str) -> str:
        """Return the accessor stem for a field's storage name."""

    def getter_name(self, field: FieldDescriptor) -> str:
        """Return the getter name for a field."""

    def setter_name(self, field: FieldDescriptor) -> str:
        """Return the setter name for a field."""


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def _has_is_prefix(name: str) -> bool:
    return len(name) > 2 and name.startswith("is") and name[2].isupper()


@dataclass(frozen=True, slots=True)
class DefaultNamingPolicy:
    """Naive naming policy usable without any IDE.

    Leading underscores are stripped, otherwise a single-letter Hungarian
    prefix from ``prefixes`` is stripped when it is followed by an upper-case
    letter (``mCount`` -> ``count``). The first letter is then lower-cased.
    """

    prefixes: Sequence[str] = DEFAULT_FIELD_PREFIXES

    def base_name(self, field_name: str) -> str:
        stem = field_name
        if "_" in self.prefixes and stem.startswith("_"):
            stem = stem.lstrip("_")
        else:
            for prefix in self.prefixes:
                if prefix == "_" or not stem.startswith(prefix):
                    continue
                rest = stem[len(prefix):]
                if rest[:1].isupper():
                    stem = rest
                    break
        if not stem:
            return field_name
        return stem[:1].lower() + stem[1:]

    def getter_name(self, field: FieldDescriptor) -> str:
        base = self.base_name(field.name)
        if field.is_boolean:
            return base if _has_is_prefix(base) else "is" + _capitalize(base)
        return "get" + _capitalize(base)

    def setter_name(self, field: FieldDescriptor) -> str:
        base = self.base_name(field.name)
        if field.is_boolean and _has_is_prefix(base):
            return "set" + base[2:]
        return "set" + _capitalize(base)
