"""Detection orchestration: per-file runner, file events, and the watcher."""

from snuts.core.events import EventSource, PollingEventSource
from snuts.core.runner import DetectorRunner
from snuts.core.watcher import Watcher, WatchSession

__all__ = [
    "DetectorRunner",
    "EventSource",
    "PollingEventSource",
    "WatchSession",
    "Watcher",
]
