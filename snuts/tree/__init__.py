"""Syntax-tree acquisition, selectors, and test-structure classification."""

from snuts.tree.query import Selector, query
from snuts.tree.service import SourceUnit, SyntaxTree, TestInfo, TreeService

__all__ = [
    "Selector",
    "SourceUnit",
    "SyntaxTree",
    "TestInfo",
    "TreeService",
    "query",
]
