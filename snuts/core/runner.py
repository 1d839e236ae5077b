"""Run every registered detector against one file, isolating failures."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from snuts.detectors.base import Detector, Smell, detector_name
from snuts.errors import DetectorFailure
from snuts.tree.service import SourceUnit, TreeService

logger = logging.getLogger(__name__)


class DetectorRunner:
    def __init__(
        self, detectors: Sequence[Detector], service: TreeService | None = None
    ) -> None:
        self.detectors = tuple(detectors)
        self.service = service or TreeService()

    async def run(self, path: str) -> list[Smell]:
        """Return the union of all detectors' smells for ``path``.

        An unreadable, empty or unparseable file yields ``[]`` without
        invoking any detector.
        """
        unit = await self.service.load(path)
        if unit is None:
            logger.warning("No syntax tree for %s; detectors skipped", path)
            return []
        results = await asyncio.gather(
            *(self._run_one(detector, unit, path) for detector in self.detectors)
        )
        return [smell for smells in results for smell in smells]

    async def _run_one(
        self, detector: Detector, unit: SourceUnit, path: str
    ) -> list[Smell]:
        name = detector_name(detector)
        try:
            smells = await detector.detect(unit.tree, unit.text, path)
        except Exception as exc:
            logger.error("%s", DetectorFailure(name, path, exc), exc_info=exc)
            return []
        if not isinstance(smells, list):
            logger.error(
                "%s",
                DetectorFailure(name, path, f"returned {type(smells).__name__}, not a list"),
            )
            return []
        return smells


__all__ = ["DetectorRunner"]
