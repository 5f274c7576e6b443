"""Host code model interface and a descriptor-file backed implementation.

The host owns source introspection: it reports the enclosing type's name and
fields, where previously generated members live, and where new members go.
``DescriptorCodeModel`` takes the type and fields from a YAML or JSON
descriptor, for example one exported by an editor plugin::

    type: Point
    source: Point.java
    fields:
      - {name: x, type: int}
      - {name: y, type: int}

``insert_offset`` and ``generated_spans`` may be given explicitly; otherwise
they are located in the source by brace-depth scanning of the type's body.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, Sequence

import yaml

from .errors import DescriptorError, ModelAccessError
from .fields import FieldDescriptor
from .scanner import MemberBlock, find_type_body, member_blocks


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` in a source buffer."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start < offset < self.end


class HostCodeModel(Protocol):
    """Structural introspection and editing primitives for one source unit."""

    def get_enclosing_type_name(self) -> str:
        """Return the simple name of the type receiving the builder."""

    def get_fields(self) -> Sequence[FieldDescriptor]:
        """Return the type's fields in declaration order."""

    def get_contents(self) -> str:
        """Return the full text of the unit."""

    def set_contents(self, text: str) -> None:
        """Replace the full text of the unit."""

    def insertion_offset(self) -> int:
        """Return the offset of the type's own closing brace."""

    def generated_spans(self) -> Sequence[Span]:
        """Return the ranges of previously generated members to remove."""


class DescriptorCodeModel:
    """Host model whose structure comes from a descriptor mapping."""

    def __init__(
        self,
        type_name: str,
        fields: Sequence[FieldDescriptor],
        contents: str = "",
        *,
        source_path: Optional[Path] = None,
        insert_offset: Optional[int] = None,
        spans: Optional[Sequence[Span]] = None,
    ) -> None:
        self.type_name = type_name
        self.fields = tuple(fields)
        self.contents = contents
        self.source_path = source_path
        self.insert_offset = insert_offset
        self.spans = None if spans is None else tuple(spans)

    @classmethod
    def from_file(cls, path: str | Path) -> "DescriptorCodeModel":
        """Load a descriptor file; a relative ``source`` is resolved next to it."""
        descriptor_path = Path(path)
        try:
            data = yaml.safe_load(descriptor_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise DescriptorError(f"Cannot read descriptor {descriptor_path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise DescriptorError(f"Descriptor {descriptor_path} is not valid YAML/JSON: {exc}") from exc
        return cls.from_mapping(data, base_dir=descriptor_path.parent)

    @classmethod
    def from_mapping(cls, data: Any, *, base_dir: Path | None = None) -> "DescriptorCodeModel":
        if not isinstance(data, Mapping):
            raise DescriptorError("Descriptor must be a mapping.")

        type_name = data.get("type")
        if not isinstance(type_name, str) or not type_name.strip():
            raise DescriptorError("Descriptor is missing the enclosing 'type' name.")

        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list):
            raise DescriptorError("Descriptor 'fields' must be a list.")
        fields = [FieldDescriptor.from_mapping(entry) for entry in raw_fields]

        source_path: Optional[Path] = None
        contents = ""
        source = data.get("source")
        if source:
            source_path = Path(source)
            if base_dir is not None and not source_path.is_absolute():
                source_path = base_dir / source_path
            try:
                contents = source_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise DescriptorError(f"Cannot read source {source_path}: {exc}") from exc

        insert_offset = data.get("insert_offset")
        if insert_offset is not None and not isinstance(insert_offset, int):
            raise DescriptorError("Descriptor 'insert_offset' must be an integer.")

        spans: Optional[list[Span]] = None
        raw_spans = data.get("generated_spans")
        if raw_spans is not None:
            if not isinstance(raw_spans, list):
                raise DescriptorError("Descriptor 'generated_spans' must be a list.")
            spans = [_parse_span(item) for item in raw_spans]

        return cls(
            type_name.strip(),
            fields,
            contents,
            source_path=source_path,
            insert_offset=insert_offset,
            spans=spans,
        )

    def get_enclosing_type_name(self) -> str:
        return self.type_name

    def get_fields(self) -> Sequence[FieldDescriptor]:
        return self.fields

    def get_contents(self) -> str:
        return self.contents

    def set_contents(self, text: str) -> None:
        if self.source_path is not None:
            try:
                self.source_path.write_text(text, encoding="utf-8")
            except OSError as exc:
                raise ModelAccessError(f"Cannot write source {self.source_path}: {exc}") from exc
            logger.info("Wrote %d characters to %s", len(text), self.source_path)
        self.contents = text

    def insertion_offset(self) -> int:
        if self.insert_offset is not None:
            return self.insert_offset
        if not self.contents.strip():
            return len(self.contents)
        return find_type_body(self.contents, self.type_name)[1]

    def generated_spans(self) -> Sequence[Span]:
        """Return descriptor spans, or locate old generated members in the unit."""
        if self.spans is not None:
            return self.spans
        if not self.contents.strip():
            return ()
        return find_generated_spans(self.contents, self.type_name)


def find_generated_spans(text: str, type_name: str) -> list[Span]:
    """Locate a nested ``Builder`` class, ``T(Builder)`` constructors and ``with`` factories.

    Only members directly inside ``type_name``'s body are considered. Each span
    covers whole lines, including the trailing newline; the ``Builder`` span
    also takes one blank line above it, matching what the synthesizer emits.
    """
    name = re.escape(type_name)
    builder_class = re.compile(r"(?:@?\w+ )*class Builder")
    consuming_constructor = re.compile(rf"(?:@?\w+ )*{name} ?\( ?(?:final )?Builder \w+ ?\)")
    with_factory = re.compile(rf"(?:@?\w+ )*static (?:\w+ )*Builder with ?\( ?(?:(?:final )?{name} \w+ ?)?\)")

    open_index, close_index = find_type_body(text, type_name)
    spans: list[Span] = []
    for block in member_blocks(text, open_index, close_index):
        if builder_class.fullmatch(block.header):
            spans.append(_member_span(text, block, blank_line_above=True))
        elif consuming_constructor.fullmatch(block.header) or with_factory.fullmatch(block.header):
            spans.append(_member_span(text, block, blank_line_above=False))
    return spans


def _member_span(text: str, block: MemberBlock, *, blank_line_above: bool) -> Span:
    start = block.start
    line_start = text.rfind("\n", 0, start) + 1
    if not text[line_start:start].strip():
        start = line_start
        if blank_line_above and start > 0:
            previous = text.rfind("\n", 0, start - 1) + 1
            if not text[previous:start].strip():
                start = previous

    end = block.close + 1
    while end < len(text) and text[end] in " \t":
        end += 1
    if text.startswith("\r\n", end):
        end += 2
    elif text.startswith("\n", end):
        end += 1
    return Span(start, end)


def _parse_span(item: Any) -> Span:
    if isinstance(item, Mapping):
        start, end = item.get("start"), item.get("end")
    elif isinstance(item, (list, tuple)) and len(item) == 2:
        start, end = item
    else:
        raise DescriptorError(f"Invalid generated span {item!r}; expected [start, end].")
    if not isinstance(start, int) or not isinstance(end, int):
        raise DescriptorError(f"Invalid generated span {item!r}; offsets must be integers.")
    return Span(start, end)
