"""Syntax-tree acquisition and test-structure classification.

``TreeService`` is the only place that knows how source text becomes a tree
and how call expressions are recognized as tests, suites and hooks. Detectors
ask it questions; they never parse on their own.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Node

from snuts.constants import ASSERTION_ROOT
from snuts.enums import Dialect
from snuts.errors import EmptyInputError, ParseError, UnreadableFileError
from snuts.tree import _adapter
from snuts.tree._grammars import dialect_order, grammar_for, parse_bytes
from snuts.tree.query import CALLS, EXPRESSION_STATEMENTS, Selector, query
from snuts.tree.shape import (
    AliasConfig,
    is_describe_shape,
    is_function_shape,
    is_hook_shape,
    is_test_case_shape,
)

logger = logging.getLogger(__name__)

DEFAULT_DIALECTS = (Dialect.FLOW, Dialect.TYPESCRIPT)


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed file: root node plus what is needed to query and slice it."""

    root: Node
    source: bytes
    grammar: str
    dialect: Dialect


@dataclass(frozen=True)
class SourceUnit:
    tree: SyntaxTree
    text: str


@dataclass(frozen=True)
class TestInfo:
    __test__ = False

    name: str
    has_assert: bool
    it_count: int
    describe_count: int


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableFileError(path, exc) from exc


class TreeService:
    def __init__(
        self,
        aliases: AliasConfig | None = None,
        dialects: tuple[Dialect, ...] = DEFAULT_DIALECTS,
    ) -> None:
        self.aliases = aliases or AliasConfig()
        self.dialects = dialects

    # ── Parsing ─────────────────────────────────────────────

    def parse(self, text: str, path: str | None = None) -> SyntaxTree:
        """Parse ``text``, trying each dialect until one yields an error-free tree.

        ``path`` is only a hint: its suffix moves the matching dialect first.
        """
        if not text.strip():
            raise EmptyInputError(path)
        source = text.encode("utf-8")
        suffix = Path(path).suffix.lower() if path else ""
        order = dialect_order(self.dialects, suffix)
        for dialect in order:
            grammar = grammar_for(dialect, suffix)
            root = parse_bytes(grammar, source)
            if not root.has_error:
                return SyntaxTree(root=root, source=source, grammar=grammar, dialect=dialect)
            logger.debug("Dialect %s (%s) rejected %s", dialect, grammar, path or "<text>")
        raise ParseError(tuple(d.value for d in order), path)

    def _unit_from_text(self, text: str, path: str) -> SourceUnit | None:
        try:
            return SourceUnit(tree=self.parse(text, path), text=text)
        except EmptyInputError:
            logger.warning("Skipping empty file: %s", path)
        except ParseError as exc:
            logger.warning("Skipping unparseable file: %s", exc)
        return None

    def parse_file(self, path: str) -> SourceUnit | None:
        """Read and parse ``path``; ``None`` (logged) when it cannot be analyzed."""
        try:
            text = _read_text(path)
        except UnreadableFileError as exc:
            logger.error("%s", exc)
            return None
        return self._unit_from_text(text, path)

    async def load(self, path: str) -> SourceUnit | None:
        """Async ``parse_file``: the read suspends, the parse runs inline."""
        try:
            text = await asyncio.to_thread(_read_text, path)
        except UnreadableFileError as exc:
            logger.error("%s", exc)
            return None
        return self._unit_from_text(text, path)

    # ── Queries ─────────────────────────────────────────────

    def query(self, tree: SyntaxTree, selector: Selector) -> list[Node]:
        return query(tree, selector)

    @property
    def test_cases(self) -> Selector:
        return CALLS.matching(self.is_test_case)

    @property
    def describe_blocks(self) -> Selector:
        return CALLS.matching(self.is_describe_block)

    @property
    def hooks(self) -> Selector:
        return CALLS.matching(self.is_hook)

    @property
    def test_statements(self) -> Selector:
        """Expression statements whose expression is a test-case call."""
        return EXPRESSION_STATEMENTS.matching(self.wraps_test_case)

    # ── Classification ──────────────────────────────────────

    def is_function(self, node: Node) -> bool:
        return is_function_shape(_adapter.node_shape(node))

    def is_test_case(self, node: Node) -> bool:
        return is_test_case_shape(_adapter.node_shape(node), self.aliases)

    def is_describe_block(self, node: Node) -> bool:
        return is_describe_shape(_adapter.node_shape(node), self.aliases)

    def is_hook(self, node: Node) -> bool:
        return is_hook_shape(_adapter.node_shape(node), self.aliases)

    def wraps_test_case(self, node: Node) -> bool:
        if node.type != "expression_statement":
            return False
        expressions = [c for c in node.named_children if c.type != "comment"]
        return bool(expressions) and self.is_test_case(expressions[0])

    def description(self, node: Node) -> str | None:
        """First string argument of a call, unquoted."""
        return _adapter.node_shape(node).first_string

    def callback_body(self, node: Node) -> Node | None:
        """Body of the function passed as a test/suite's second argument."""
        args = _adapter.call_arguments(node)
        if len(args) < 2 or not self.is_function(args[1]):
            return None
        return args[1].child_by_field_name("body")

    @staticmethod
    def is_empty_block(node: Node | None) -> bool:
        """A ``{}`` body holding nothing but (optionally) comments."""
        if node is None or node.type != "statement_block":
            return False
        return all(c.type == _adapter.COMMENT_NODE_TYPE for c in node.named_children)

    # ── Comments ────────────────────────────────────────────

    def count_comments(self, node: Node) -> int:
        """Leading + trailing + inner comments attached to ``node``."""
        return (
            len(_adapter.leading_comments(node))
            + len(_adapter.trailing_comments(node))
            + len(_adapter.inner_comments(node))
        )

    def has_many_comments(self, node: Node, max_comments: int) -> bool:
        return self.count_comments(node) > max_comments

    # ── Test summaries ──────────────────────────────────────

    def has_assert(self, node: Node) -> bool:
        """True once any nested call's callee is a member chain rooted at ``expect``."""
        return any(
            d.type == "call_expression"
            and (callee := d.child_by_field_name("function")) is not None
            and callee.type == "member_expression"
            and _adapter.root_identifier(callee) == ASSERTION_ROOT
            for d in _adapter.iter_descendants(node)
        )

    def test_info(self, node: Node) -> TestInfo | None:
        if not self.is_test_case(node):
            return None
        it_count = 0
        describe_count = 0
        for d in _adapter.iter_descendants(node):
            if d.type != "call_expression":
                continue
            if self.is_test_case(d):
                it_count += 1
            elif self.is_describe_block(d):
                describe_count += 1
        return TestInfo(
            name=(self.description(node) or "").strip(),
            has_assert=self.has_assert(node),
            it_count=it_count,
            describe_count=describe_count,
        )


__all__ = [
    "DEFAULT_DIALECTS",
    "SourceUnit",
    "SyntaxTree",
    "TestInfo",
    "TreeService",
]
