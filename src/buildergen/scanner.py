"""Brace-depth scanning over Java source text.

Comments, string, text-block and character literals are skipped, so braces
inside them never affect depth. This is not a parser: it only locates a
type's body and the brace-delimited members directly inside it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import LocationError


_COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)


@dataclass(frozen=True, slots=True)
class MemberBlock:
    """A brace-delimited member of a type body.

    ``header`` is the declaration text before the opening brace with comments
    removed and whitespace collapsed; ``start`` is the first non-blank
    character of that declaration.
    """

    header: str
    start: int
    open: int
    close: int


def _skip_non_code(text: str, i: int) -> Optional[int]:
    if text.startswith("//", i):
        end = text.find("\n", i)
        return len(text) if end < 0 else end
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        return len(text) if end < 0 else end + 2
    if text.startswith('"""', i):
        end = text.find('"""', i + 3)
        return len(text) if end < 0 else end + 3
    quote = text[i]
    if quote in "\"'":
        j = i + 1
        while j < len(text) and text[j] not in (quote, "\n"):
            j += 2 if text[j] == "\\" else 1
        return min(j + 1, len(text))
    return None


def code_positions(text: str, start: int = 0, end: Optional[int] = None) -> Iterator[int]:
    """Yield the indices in ``[start, end)`` that lie outside comments and literals."""
    end = len(text) if end is None else end
    i = start
    while i < end:
        skipped = _skip_non_code(text, i)
        if skipped is not None:
            i = skipped
            continue
        yield i
        i += 1


def matching_brace(text: str, open_index: int) -> int:
    """Return the index of the ``}`` closing the ``{`` at ``open_index``."""
    depth = 0
    for i in code_positions(text, open_index):
        char = text[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
    raise LocationError(f"Unbalanced braces: no match for '{{' at offset {open_index}.")


def find_type_body(text: str, type_name: str) -> tuple[int, int]:
    """Return the offsets of the opening and closing braces of ``type_name``'s body."""
    declaration = re.compile(rf"(?:class|interface|enum|record)\s+{re.escape(type_name)}\b")
    for i in code_positions(text):
        if i > 0 and (text[i - 1].isalnum() or text[i - 1] in "_$"):
            continue
        match = declaration.match(text, i)
        if match is None:
            continue
        for j in code_positions(text, match.end()):
            if text[j] == "{":
                return j, matching_brace(text, j)
            if text[j] == ";":
                break
    raise LocationError(f"No declaration of type '{type_name}' found in the unit.")


def member_blocks(text: str, open_index: int, close_index: int) -> Iterator[MemberBlock]:
    """Yield the brace-delimited members directly inside the body ``{...}``."""
    depth = 0
    segment_start = open_index + 1
    block_open = open_index
    for i in code_positions(text, open_index + 1, close_index):
        char = text[i]
        if char == "{":
            if depth == 0:
                block_open = i
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                segment = text[segment_start:block_open]
                header = " ".join(_COMMENT.sub(" ", segment).split())
                start = segment_start + len(segment) - len(segment.lstrip())
                yield MemberBlock(header=header, start=start, open=block_open, close=i)
                segment_start = i + 1
        elif char == ";" and depth == 0:
            segment_start = i + 1
