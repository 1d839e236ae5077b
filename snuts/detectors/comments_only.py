"""Comments-only tests: test bodies with no statements."""

from __future__ import annotations

from snuts.detectors.base import Smell, smell_at
from snuts.tree.service import SyntaxTree, TreeService


class CommentsOnlyDetector:
    name = "comments_only_test"

    def __init__(self, service: TreeService | None = None) -> None:
        self.service = service or TreeService()

    async def detect(self, tree: SyntaxTree, text: str, path: str) -> list[Smell]:
        # Comments are not statements, so a comment-only body is an empty block.
        return [
            smell_at(node, tree, path, "Test case with only comments or empty body detected.")
            for node in self.service.query(tree, self.service.test_cases)
            if self.service.is_empty_block(self.service.callback_body(node))
        ]
