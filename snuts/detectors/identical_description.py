"""Identical descriptions: test cases that reuse an earlier title in the same file."""

from __future__ import annotations

from snuts.detectors.base import Smell, smell_at
from snuts.tree.service import SyntaxTree, TreeService


class IdenticalDescriptionDetector:
    name = "identical_description"

    def __init__(self, service: TreeService | None = None) -> None:
        self.service = service or TreeService()

    async def detect(self, tree: SyntaxTree, text: str, path: str) -> list[Smell]:
        smells: list[Smell] = []
        seen: set[str] = set()
        for node in self.service.query(tree, self.service.test_cases):
            description = (self.service.description(node) or "").strip()
            if description in seen:
                smells.append(
                    smell_at(
                        node,
                        tree,
                        path,
                        f'Identical description test case detected: "{description}"',
                    )
                )
            seen.add(description)
        return smells
