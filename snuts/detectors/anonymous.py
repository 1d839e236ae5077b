"""Anonymous tests: empty, blank, or vacuously short descriptions."""

from __future__ import annotations

from snuts.constants import ANONYMOUS_MAX_WORDS
from snuts.detectors.base import Smell, smell_at
from snuts.tree.service import SyntaxTree, TreeService
from snuts.tree.shape import count_words


class AnonymousTestDetector:
    name = "anonymous_test"

    def __init__(
        self, service: TreeService | None = None, max_words: int = ANONYMOUS_MAX_WORDS
    ) -> None:
        self.service = service or TreeService()
        self.max_words = max_words

    async def detect(self, tree: SyntaxTree, text: str, path: str) -> list[Smell]:
        return [
            smell_at(node, tree, path, "Anonymous test case detected.")
            for node in self.service.query(tree, self.service.test_cases)
            if count_words(self.service.description(node) or "") <= self.max_words
        ]
