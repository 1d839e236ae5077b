"""Detector registry: the built-in smell rules in reporting order."""

from __future__ import annotations

from snuts.constants import ANONYMOUS_MAX_WORDS, MAX_COMMENTS_PER_TEST
from snuts.detectors.anonymous import AnonymousTestDetector
from snuts.detectors.assertionless import AssertionlessTestDetector
from snuts.detectors.base import Detector, Position, Smell, detector_name
from snuts.detectors.comments_only import CommentsOnlyDetector
from snuts.detectors.conditional import ConditionalLogicDetector
from snuts.detectors.identical_description import IdenticalDescriptionDetector
from snuts.detectors.overcommented import OvercommentedDetector
from snuts.tree.service import TreeService


def default_detectors(
    service: TreeService | None = None,
    *,
    max_comments: int = MAX_COMMENTS_PER_TEST,
    anonymous_max_words: int = ANONYMOUS_MAX_WORDS,
) -> tuple[Detector, ...]:
    """Build the built-in detector set sharing one tree service."""
    service = service or TreeService()
    return (
        ConditionalLogicDetector(service),
        IdenticalDescriptionDetector(service),
        AnonymousTestDetector(service, max_words=anonymous_max_words),
        CommentsOnlyDetector(service),
        OvercommentedDetector(service, max_comments=max_comments),
        AssertionlessTestDetector(service),
    )


__all__ = [
    "AnonymousTestDetector",
    "AssertionlessTestDetector",
    "CommentsOnlyDetector",
    "ConditionalLogicDetector",
    "Detector",
    "IdenticalDescriptionDetector",
    "OvercommentedDetector",
    "Position",
    "Smell",
    "default_detectors",
    "detector_name",
]
