"""File-system change events from mtime polling.

Polls the watched paths on an interval and turns snapshot differences into
``add``/``change`` events. Deletions are not reported.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from snuts.constants import DEFAULT_POLL_INTERVAL_MS, SOURCE_EXTENSIONS
from snuts.discovery import snapshot_mtimes
from snuts.enums import FileEvent

logger = logging.getLogger(__name__)

EventCallback = Callable[[FileEvent, str], None]


class EventSource(Protocol):
    def start(self, callback: EventCallback) -> None: ...

    async def stop(self) -> None: ...


def diff_snapshots(
    previous: dict[str, float], current: dict[str, float]
) -> list[tuple[FileEvent, str]]:
    events: list[tuple[FileEvent, str]] = []
    for path, mtime in current.items():
        if path not in previous:
            events.append((FileEvent.ADD, path))
        elif previous[path] != mtime:
            events.append((FileEvent.CHANGE, path))
    return events


class PollingEventSource:
    def __init__(
        self,
        paths: Iterable[str],
        *,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        exclusions: Iterable[str] = (),
        extensions: Iterable[str] = SOURCE_EXTENSIONS,
    ) -> None:
        self.paths = tuple(paths)
        self.interval = interval_ms / 1000
        self.exclusions = tuple(exclusions)
        self.extensions = tuple(extensions)
        self._task: asyncio.Task | None = None

    def _snapshot(self) -> dict[str, float]:
        return snapshot_mtimes(self.paths, self.extensions, self.exclusions)

    def start(self, callback: EventCallback) -> None:
        if self._task is not None:
            raise RuntimeError("Event source already started")
        self._task = asyncio.get_running_loop().create_task(self._poll(callback))

    async def _poll(self, callback: EventCallback) -> None:
        previous = await asyncio.to_thread(self._snapshot)
        logger.debug("Polling %d files every %.3fs", len(previous), self.interval)
        while True:
            await asyncio.sleep(self.interval)
            try:
                current = await asyncio.to_thread(self._snapshot)
            except OSError as exc:
                logger.warning("File poll failed, retrying: %s", exc)
                continue
            except Exception:
                logger.exception("File poll failed, retrying")
                continue
            for event, path in diff_snapshots(previous, current):
                try:
                    callback(event, path)
                except Exception:
                    logger.exception("Event handler failed for %s %s", event, path)
            previous = current

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


__all__ = ["EventCallback", "EventSource", "PollingEventSource", "diff_snapshots"]
