"""Grammar loading and query compilation (cached per grammar)."""

from __future__ import annotations

import functools
import logging

from tree_sitter import Language, Node, Parser, Query, QueryCursor
from tree_sitter_language_pack import get_language, get_parser

from snuts.enums import Dialect

logger = logging.getLogger(__name__)

MATCH_CAPTURE = "match"

_TYPESCRIPT_ONLY_SUFFIXES = (".ts", ".mts", ".cts")
_FLOW_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs")


def grammar_for(dialect: Dialect, suffix: str = "") -> str:
    """Return the tree-sitter grammar name that implements a dialect."""
    if dialect is Dialect.FLOW:
        return "javascript"
    # The tsx grammar rejects `<T>value` casts, so plain .ts files get the
    # non-JSX grammar.
    if suffix in _TYPESCRIPT_ONLY_SUFFIXES:
        return "typescript"
    return "tsx"


def dialect_order(
    dialects: tuple[Dialect, ...], suffix: str = ""
) -> tuple[Dialect, ...]:
    """Move the dialect hinted by a file suffix to the front."""
    if suffix in _TYPESCRIPT_ONLY_SUFFIXES or suffix in (".tsx",):
        preferred = Dialect.TYPESCRIPT
    elif suffix in _FLOW_SUFFIXES:
        preferred = Dialect.FLOW
    else:
        return dialects
    if preferred not in dialects:
        return dialects
    return (preferred, *(d for d in dialects if d is not preferred))


@functools.lru_cache(maxsize=None)
def _get_parser(grammar: str) -> tuple[Parser, Language]:
    logger.debug("Loading tree-sitter grammar %s", grammar)
    return get_parser(grammar), get_language(grammar)


@functools.lru_cache(maxsize=256)
def _make_query(grammar: str, pattern: str) -> Query:
    _, language = _get_parser(grammar)
    return Query(language, pattern)


def parse_bytes(grammar: str, source: bytes) -> Node:
    parser, _ = _get_parser(grammar)
    return parser.parse(source).root_node


def run_query(grammar: str, root: Node, pattern: str) -> list[Node]:
    """Return every node captured as ``@match`` in document order."""
    query = _make_query(grammar, pattern)
    captures = QueryCursor(query).captures(root)
    nodes = captures.get(MATCH_CAPTURE, [])
    return sorted(nodes, key=lambda n: (n.start_byte, -n.end_byte))


__all__ = [
    "MATCH_CAPTURE",
    "dialect_order",
    "grammar_for",
    "parse_bytes",
    "run_query",
]
