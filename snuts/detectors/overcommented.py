"""Overcommented tests: test statements carrying too many comments."""

from __future__ import annotations

from snuts.constants import MAX_COMMENTS_PER_TEST
from snuts.detectors.base import Smell, smell_at
from snuts.tree.service import SyntaxTree, TreeService


class OvercommentedDetector:
    name = "overcommented_test"

    def __init__(
        self, service: TreeService | None = None, max_comments: int = MAX_COMMENTS_PER_TEST
    ) -> None:
        self.service = service or TreeService()
        self.max_comments = max_comments

    async def detect(self, tree: SyntaxTree, text: str, path: str) -> list[Smell]:
        smells: list[Smell] = []
        for statement in self.service.query(tree, self.service.test_statements):
            count = self.service.count_comments(statement)
            if count > self.max_comments:
                smells.append(
                    smell_at(
                        statement,
                        tree,
                        path,
                        f"Test has too many comments ({count}). "
                        f"The maximum allowed is {self.max_comments}.",
                    )
                )
        return smells
