"""Terminal output: colors and smell report blocks."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

from snuts.constants import SNIPPET_MAX_CHARS
from snuts.detectors.base import Smell
from snuts.enums import Severity

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}

SEVERITY_COLORS = {
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}

SEPARATOR = "-" * 40


def colorize(text: str, color: str, stream: TextIO | None = None) -> str:
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR") is not None or not stream.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def truncate(snippet: str, max_chars: int = SNIPPET_MAX_CHARS) -> str:
    if max_chars <= 0 or len(snippet) <= max_chars:
        return snippet
    return snippet[: max(max_chars - 3, 0)] + "..."


def format_smell(
    smell: Smell, *, max_chars: int = SNIPPET_MAX_CHARS, stream: TextIO | None = None
) -> str:
    location = (
        f"{smell.start.line}:{smell.start.column} - {smell.end.line}:{smell.end.column}"
    )
    color = SEVERITY_COLORS.get(smell.severity, "yellow")
    return "\n".join(
        [
            SEPARATOR,
            f"File: {smell.file}",
            f"Location: {location}",
            f"Smell: {colorize(smell.message, color, stream)} [{smell.severity}]",
            "Code:",
            truncate(smell.code_block, max_chars),
            SEPARATOR,
        ]
    )


class Reporter:
    """Print one block per smell; clean files only show up in verbose mode."""

    def __init__(
        self,
        *,
        verbose: bool = False,
        snippet_max_chars: int = SNIPPET_MAX_CHARS,
        stream: TextIO | None = None,
    ) -> None:
        self.verbose = verbose
        self.snippet_max_chars = snippet_max_chars
        self.stream = stream

    def report(self, path: str, smells: Sequence[Smell]) -> None:
        stream = self.stream or sys.stdout
        if not smells:
            if self.verbose:
                print(colorize(f"No smells in {path}", "green", stream), file=stream)
            return
        for smell in smells:
            print(
                format_smell(smell, max_chars=self.snippet_max_chars, stream=stream),
                file=stream,
            )


__all__ = ["COLORS", "Reporter", "colorize", "format_smell", "truncate"]
