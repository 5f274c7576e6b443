"""Configuration helpers for buildergen."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Optional

from dotenv import dotenv_values


DEFAULT_FIELD_PREFIXES: tuple[str, ...] = ("_", "m", "f")
DEFAULT_FORMATTER_TIMEOUT = 10.0

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass
class Settings:
    """Container for environment-derived configuration."""

    create_builder_constructor: bool = False
    create_static_with_methods: bool = True
    create_copy_constructor: bool = True
    create_builder_getters: bool = False
    create_class_getters: bool = False
    create_class_setters: bool = False
    format_source: bool = True
    field_prefixes: tuple[str, ...] = DEFAULT_FIELD_PREFIXES
    formatter_command: Optional[str] = None
    formatter_url: Optional[str] = None
    formatter_timeout: float = DEFAULT_FORMATTER_TIMEOUT

    @classmethod
    def from_env(cls, *, env_files: Iterable[str] | None = None) -> "Settings":
        """Build settings from environment variables, optionally loading dotenv files."""

        env_overrides: dict[str, str] = {}
        if env_files:
            for candidate in env_files:
                candidate_path = os.path.abspath(candidate)
                if os.path.isfile(candidate_path):
                    values = {
                        key: value
                        for key, value in dotenv_values(candidate_path).items()
                        if value is not None
                    }
                    env_overrides.update(values)

        def get_override(key: str) -> str | None:
            if key in os.environ:
                return os.environ[key]
            return env_overrides.get(key)

        def lookup(key: str, default: str) -> str:
            value = get_override(key)
            return value if value is not None else default

        def lookup_optional(key: str) -> Optional[str]:
            value = get_override(key)
            if value is None:
                return None
            stripped = value.strip()
            return stripped or None

        def lookup_flag(key: str, default: bool) -> bool:
            return parse_flag(get_override(key), default)

        defaults = cls()
        return cls(
            create_builder_constructor=lookup_flag(
                "BUILDERGEN_CREATE_BUILDER_CONSTRUCTOR", defaults.create_builder_constructor
            ),
            create_static_with_methods=lookup_flag(
                "BUILDERGEN_CREATE_STATIC_WITH_METHODS", defaults.create_static_with_methods
            ),
            create_copy_constructor=lookup_flag(
                "BUILDERGEN_CREATE_COPY_CONSTRUCTOR", defaults.create_copy_constructor
            ),
            create_builder_getters=lookup_flag(
                "BUILDERGEN_CREATE_BUILDER_GETTERS", defaults.create_builder_getters
            ),
            create_class_getters=lookup_flag("BUILDERGEN_CREATE_CLASS_GETTERS", defaults.create_class_getters),
            create_class_setters=lookup_flag("BUILDERGEN_CREATE_CLASS_SETTERS", defaults.create_class_setters),
            format_source=lookup_flag("BUILDERGEN_FORMAT_SOURCE", defaults.format_source),
            field_prefixes=parse_prefixes(lookup_optional("BUILDERGEN_FIELD_PREFIXES")),
            formatter_command=lookup_optional("BUILDERGEN_FORMATTER_CMD"),
            formatter_url=lookup_optional("BUILDERGEN_FORMATTER_URL"),
            formatter_timeout=float(
                lookup("BUILDERGEN_FORMATTER_TIMEOUT", str(DEFAULT_FORMATTER_TIMEOUT))
            ),
        )


def parse_flag(value: str | None, default: bool) -> bool:
    """Interpret an environment string as a boolean, keeping ``default`` when unrecognised."""
    if value is None:
        return default
    token = value.strip().lower()
    if token in _TRUTHY:
        return True
    if token in _FALSY:
        return False
    return default


def parse_prefixes(value: str | None) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_FIELD_PREFIXES
    return tuple(part.strip() for part in value.split(",") if part.strip())
