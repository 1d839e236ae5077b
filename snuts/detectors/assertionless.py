"""Assertionless ("unknown") tests: bodies that never call ``expect``."""

from __future__ import annotations

from snuts.detectors.base import Smell, smell_at
from snuts.tree.service import SyntaxTree, TreeService


class AssertionlessTestDetector:
    name = "assertionless_test"

    def __init__(self, service: TreeService | None = None) -> None:
        self.service = service or TreeService()

    async def detect(self, tree: SyntaxTree, text: str, path: str) -> list[Smell]:
        smells: list[Smell] = []
        for node in self.service.query(tree, self.service.test_cases):
            # Empty bodies are the comments-only detector's finding.
            if self.service.is_empty_block(self.service.callback_body(node)):
                continue
            info = self.service.test_info(node)
            if info is None or info.has_assert or info.it_count:
                continue
            smells.append(
                smell_at(
                    node,
                    tree,
                    path,
                    f'Test case "{info.name}" has no assertions.',
                )
            )
        return smells
