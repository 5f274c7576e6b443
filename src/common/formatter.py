"""External source formatters reached through a CLI tool or an HTTP service.

A formatter returns ``None`` when the source cannot be formatted; callers keep
the unformatted text in that case.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

import requests

from .config import Settings


logger = logging.getLogger(__name__)


class Formatter(Protocol):
    """Protocol describing a whole-unit source formatter."""

    def format(self, source: str) -> Optional[str]:
        """Return the formatted source, or ``None`` if formatting failed."""


Runner = Callable[[List[str], str, float], subprocess.CompletedProcess]


def _default_runner(args: List[str], stdin: str, timeout: float) -> subprocess.CompletedProcess:
    return subprocess.run(args, input=stdin, check=False, capture_output=True, text=True, timeout=timeout)


@dataclass(slots=True)
class CommandFormatter:
    """Pipe the source through a formatter command (e.g. ``google-java-format -``)."""

    command: str
    timeout: float = 10.0
    runner: Runner = _default_runner

    def format(self, source: str) -> Optional[str]:
        try:
            args = shlex.split(self.command)
            result = self.runner(args, source, self.timeout)
        except (OSError, ValueError, subprocess.TimeoutExpired) as exc:
            logger.warning("Formatter command %r could not run: %s", self.command, exc)
            return None
        if result.returncode != 0:
            logger.warning(
                "Formatter command %r exited with %s: %s",
                self.command,
                result.returncode,
                (result.stderr or "").strip(),
            )
            return None
        return _non_blank(result.stdout, self.command)


@dataclass(slots=True)
class HttpFormatter:
    """POST the source to a formatting service and read the formatted text back.

    The reply is either JSON carrying ``formatted`` (or ``source``) or a
    ``text/plain`` body; any other content type is treated as a failure.
    """

    url: str
    timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def format(self, source: str) -> Optional[str]:
        try:
            resp = self.session.post(self.url, json={"source": source}, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Formatter service %s unreachable: %s", self.url, exc)
            return None
        if not resp.ok:
            logger.warning("Formatter service %s returned HTTP %s", self.url, resp.status_code)
            return None
        content_type = resp.headers.get("Content-Type", "").lower()
        if content_type.startswith("text/plain"):
            return _non_blank(resp.text, self.url)
        if "json" not in content_type:
            logger.warning("Formatter service %s replied with unexpected content type %r", self.url, content_type)
            return None
        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Formatter service %s returned malformed JSON", self.url)
            return None
        if not isinstance(payload, dict):
            return None
        formatted = payload.get("formatted", payload.get("source"))
        return _non_blank(formatted, self.url) if isinstance(formatted, str) else None


def _non_blank(text: Optional[str], origin: str) -> Optional[str]:
    if not text or not text.strip():
        logger.warning("Formatter %s returned no source", origin)
        return None
    return text


def build_formatter(settings: Settings) -> Optional[Formatter]:
    """Pick the configured formatter, preferring the HTTP service over a command."""
    if settings.formatter_url:
        return HttpFormatter(url=settings.formatter_url, timeout=settings.formatter_timeout)
    if settings.formatter_command:
        return CommandFormatter(command=settings.formatter_command, timeout=settings.formatter_timeout)
    return None
