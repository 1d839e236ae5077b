"""Conditional test logic: ``if``/``switch`` statements in tests."""

from __future__ import annotations

from snuts.detectors.base import Smell, smell_at
from snuts.enums import Severity
from snuts.tree.query import CONDITIONAL_STATEMENTS
from snuts.tree.service import SyntaxTree, TreeService

_KIND_LABELS = {"if_statement": "if statement", "switch_statement": "switch statement"}


class ConditionalLogicDetector:
    """Flag each conditional nested in a test case.

    Conditionals in a suite body but outside every test case (typically in
    hooks or suite-level setup) are reported at low severity. Conditionals
    outside any suite are helper code and are left alone.
    """

    name = "conditional_test_logic"

    def __init__(self, service: TreeService | None = None) -> None:
        self.service = service or TreeService()

    async def detect(self, tree: SyntaxTree, text: str, path: str) -> list[Smell]:
        test_cases = self.service.test_cases
        inside_tests = self.service.query(tree, CONDITIONAL_STATEMENTS.within(test_cases))
        outside_tests = self.service.query(
            tree,
            CONDITIONAL_STATEMENTS.within(self.service.describe_blocks).not_within(test_cases),
        )

        smells = [
            smell_at(
                node,
                tree,
                path,
                f"Conditional test logic detected ({_KIND_LABELS[node.type]})",
            )
            for node in inside_tests
        ]
        smells.extend(
            smell_at(
                node,
                tree,
                path,
                f"Conditional logic outside of test case detected ({_KIND_LABELS[node.type]})",
                Severity.LOW,
            )
            for node in outside_tests
        )
        return smells
