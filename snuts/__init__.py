"""Static test-smell detection for JavaScript and TypeScript test files."""

from snuts.core import DetectorRunner, Watcher
from snuts.detectors import Detector, Position, Smell, default_detectors
from snuts.tree import TreeService

__all__ = [
    "Detector",
    "DetectorRunner",
    "Position",
    "Smell",
    "TreeService",
    "Watcher",
    "default_detectors",
]
