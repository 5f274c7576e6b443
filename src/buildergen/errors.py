"""Error taxonomy for builder generation."""

from __future__ import annotations


class BuilderGenError(RuntimeError):
    """Base class for failures raised while generating a builder."""


class ModelAccessError(BuilderGenError):
    """The host code model could not resolve the type or its fields."""


class DescriptorError(ModelAccessError):
    """A descriptor file is missing, unreadable, or malformed."""


class MalformedEditError(BuilderGenError):
    """An edit span is invalid or conflicts with the buffer contents."""


class LocationError(BuilderGenError):
    """No valid insertion offset could be determined."""
