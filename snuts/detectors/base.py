"""Smell value types, the detector contract, and smell construction helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from tree_sitter import Node

from snuts.constants import SNIPPET_FALLBACK
from snuts.enums import Severity
from snuts.tree import _adapter
from snuts.tree.service import SyntaxTree


@dataclass(frozen=True, order=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True)
class Smell:
    file: str
    start: Position
    end: Position
    message: str
    code_block: str
    severity: Severity = Severity.MEDIUM


@runtime_checkable
class Detector(Protocol):
    """One smell rule. Must be safe to run concurrently on different files."""

    async def detect(self, tree: SyntaxTree, text: str, path: str) -> list[Smell]: ...


def detector_name(detector: object) -> str:
    return getattr(detector, "name", None) or type(detector).__name__


def node_positions(node: Node, tree: SyntaxTree) -> tuple[Position, Position]:
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    return (
        Position(
            line=start_row + 1,
            column=_adapter.char_column(node.start_byte, start_col, tree.source),
        ),
        Position(
            line=end_row + 1,
            column=_adapter.char_column(node.end_byte, end_col, tree.source),
        ),
    )


def code_block(node: Node, tree: SyntaxTree) -> str:
    """Verbatim source of ``node``; the fallback string when it is empty."""
    snippet = tree.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    return snippet or SNIPPET_FALLBACK


def smell_at(
    node: Node,
    tree: SyntaxTree,
    path: str,
    message: str,
    severity: Severity = Severity.MEDIUM,
) -> Smell:
    start, end = node_positions(node, tree)
    return Smell(
        file=path,
        start=start,
        end=end,
        message=message,
        code_block=code_block(node, tree),
        severity=severity,
    )


__all__ = [
    "Detector",
    "Position",
    "Smell",
    "code_block",
    "detector_name",
    "node_positions",
    "smell_at",
]
