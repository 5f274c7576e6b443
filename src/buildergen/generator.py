"""Orchestrate builder regeneration against a host code model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from common import Formatter

from .errors import BuilderGenError, LocationError, MalformedEditError
from .host import HostCodeModel, Span
from .naming import NamingPolicy
from .options import GenerationOptions
from .synthesizer import synthesize


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GenerationOutcome:
    """Result of one generation: the new unit text on success, the error otherwise."""

    ok: bool
    generated: str = ""
    contents: Optional[str] = None
    formatted: bool = False
    error: Optional[BuilderGenError] = None


class Generator(Protocol):
    def generate(self, model: HostCodeModel) -> GenerationOutcome:
        """Regenerate the builder in ``model``."""


class BuilderGenerator:
    """Replace previously generated builder members with freshly synthesized ones.

    The new unit text is computed completely in memory (old spans removed,
    new text inserted, optionally formatted) and written back with a single
    ``set_contents`` call, so a failure leaves the host buffer untouched.
    """

    def __init__(
        self,
        options: GenerationOptions | None = None,
        *,
        naming: NamingPolicy | None = None,
        formatter: Formatter | None = None,
    ) -> None:
        self.options = options or GenerationOptions()
        self.naming = naming
        self.formatter = formatter

    def generate(self, model: HostCodeModel) -> GenerationOutcome:
        try:
            type_name = model.get_enclosing_type_name()
            fields = model.get_fields()
            generated = synthesize(type_name, fields, self.options, self.naming)
            contents = splice_unit(
                model.get_contents(),
                model.generated_spans(),
                model.insertion_offset(),
                generated,
            )
            formatted = False
            if self.options.format_source and self.formatter is not None:
                result = self.formatter.format(contents)
                if result is None or not result.strip():
                    logger.info("Formatter declined %s; keeping unformatted source", type_name)
                else:
                    contents = result
                    formatted = True
            model.set_contents(contents)
        except BuilderGenError as exc:
            logger.error("Builder generation aborted: %s", exc)
            return GenerationOutcome(ok=False, error=exc)

        logger.info("Generated builder for %s (%d field(s))", type_name, len(fields))
        return GenerationOutcome(ok=True, generated=generated, contents=contents, formatted=formatted)


def splice_unit(contents: str, spans: Sequence[Span], offset: int, text: str) -> str:
    """Remove ``spans`` from ``contents`` and insert ``text`` at ``offset``.

    ``offset`` refers to the original contents and is shifted past removed
    spans. Spans must lie within the contents and must not overlap.
    """
    ordered = sorted(spans, key=lambda span: (span.start, span.end))
    previous_end = 0
    for span in ordered:
        if not 0 <= span.start <= span.end <= len(contents):
            raise MalformedEditError(
                f"Span [{span.start}, {span.end}) is outside the unit (length {len(contents)})."
            )
        if span.start < previous_end:
            raise MalformedEditError(f"Span [{span.start}, {span.end}) overlaps a previous span.")
        previous_end = span.end

    if not 0 <= offset <= len(contents):
        raise LocationError(f"Insertion offset {offset} is outside the unit (length {len(contents)}).")
    for span in ordered:
        if span.contains(offset):
            raise LocationError(f"Insertion offset {offset} falls inside removed span [{span.start}, {span.end}).")

    pieces: list[str] = []
    cursor = 0
    inserted = False
    for span in ordered:
        if not inserted and offset <= span.start:
            pieces.append(contents[cursor:offset])
            pieces.append(text)
            cursor = offset
            inserted = True
        pieces.append(contents[cursor:span.start])
        cursor = span.end
    if not inserted:
        pieces.append(contents[cursor:offset])
        pieces.append(text)
        cursor = offset
    pieces.append(contents[cursor:])
    return "".join(pieces)
