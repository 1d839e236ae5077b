"""Structural selectors over syntax trees.

A selector is a tree-sitter query pattern that captures ``@match``, narrowed
by an optional Python predicate and by nesting combinators:

    IF_STATEMENTS.within(test_cases)       # ifs nested inside a test case
    IF_STATEMENTS.not_within(test_cases)   # ifs outside every test case
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from tree_sitter import Node

from snuts.tree._adapter import contains
from snuts.tree._grammars import run_query

if TYPE_CHECKING:
    from snuts.tree.service import SyntaxTree


@dataclass(frozen=True)
class Selector:
    pattern: str
    where: Callable[[Node], bool] | None = None
    inside: tuple[Selector, ...] = ()
    outside: tuple[Selector, ...] = ()

    def matching(self, predicate: Callable[[Node], bool]) -> Selector:
        return replace(self, where=predicate)

    def within(self, ancestor: Selector) -> Selector:
        return replace(self, inside=(*self.inside, ancestor))

    def not_within(self, ancestor: Selector) -> Selector:
        return replace(self, outside=(*self.outside, ancestor))


def _nested_in_any(node: Node, ancestors: list[Node]) -> bool:
    return any(contains(ancestor, node) for ancestor in ancestors)


def query(tree: SyntaxTree, selector: Selector) -> list[Node]:
    """Return all nodes of ``tree`` matching ``selector``, in source order."""
    nodes = run_query(tree.grammar, tree.root, selector.pattern)
    if selector.where is not None:
        nodes = [n for n in nodes if selector.where(n)]
    for ancestor_selector in selector.inside:
        ancestors = query(tree, ancestor_selector)
        nodes = [n for n in nodes if _nested_in_any(n, ancestors)]
    for ancestor_selector in selector.outside:
        ancestors = query(tree, ancestor_selector)
        nodes = [n for n in nodes if not _nested_in_any(n, ancestors)]
    return nodes


CALLS = Selector("(call_expression) @match")
EXPRESSION_STATEMENTS = Selector("(expression_statement) @match")
IF_STATEMENTS = Selector("(if_statement) @match")
SWITCH_STATEMENTS = Selector("(switch_statement) @match")
CONDITIONAL_STATEMENTS = Selector("[(if_statement) (switch_statement)] @match")


__all__ = [
    "CALLS",
    "CONDITIONAL_STATEMENTS",
    "EXPRESSION_STATEMENTS",
    "IF_STATEMENTS",
    "SWITCH_STATEMENTS",
    "Selector",
    "query",
]
