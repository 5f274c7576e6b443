"""Builder-pattern source generation for Java classes."""

from importlib import metadata

from .fields import FieldDescriptor
from .generator import BuilderGenerator, GenerationOutcome
from .naming import DefaultNamingPolicy, NamingPolicy
from .options import GenerationOptions
from .synthesizer import BuilderSynthesizer, synthesize


try:
    __version__ = metadata.version("buildergen")
except metadata.PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "BuilderGenerator",
    "BuilderSynthesizer",
    "DefaultNamingPolicy",
    "FieldDescriptor",
    "GenerationOptions",
    "GenerationOutcome",
    "NamingPolicy",
    "synthesize",
]
