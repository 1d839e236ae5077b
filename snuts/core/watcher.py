"""Watch session: initial scan, debounced change handling, bounded concurrency."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from snuts.constants import (
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_POLL_INTERVAL_MS,
    TEST_FILE_PATTERNS,
)
from snuts.core.events import EventSource, PollingEventSource
from snuts.core.runner import DetectorRunner
from snuts.detectors.base import Detector, Smell
from snuts.discovery import find_test_files
from snuts.enums import FileEvent
from snuts.output import Reporter
from snuts.tree.service import TreeService

logger = logging.getLogger(__name__)


@dataclass
class WatchSession:
    """State owned by one ``start()``/``stop()`` cycle of a Watcher."""

    paths: tuple[str, ...]
    gate: asyncio.Semaphore
    timers: dict[str, asyncio.TimerHandle] = field(default_factory=dict)
    tasks: set[asyncio.Task] = field(default_factory=set)
    stopped: asyncio.Event = field(default_factory=asyncio.Event)

    def track(self, task: asyncio.Task) -> None:
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)


class Watcher:
    def __init__(
        self,
        paths: Iterable[str],
        detectors: Sequence[Detector],
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        exclusions: Iterable[str] = (),
        patterns: Iterable[str] = TEST_FILE_PATTERNS,
        service: TreeService | None = None,
        event_source: EventSource | None = None,
        reporter: Reporter | None = None,
        runner: DetectorRunner | None = None,
    ) -> None:
        if concurrency_limit < 1:
            raise ValueError(f"concurrency_limit must be >= 1, got {concurrency_limit}")
        if debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {debounce_ms}")
        self.paths = tuple(paths)
        self.debounce_ms = debounce_ms
        self.concurrency_limit = concurrency_limit
        self.exclusions = tuple(exclusions)
        self.patterns = tuple(patterns)
        self.runner = runner or DetectorRunner(detectors, service)
        self.event_source = event_source or PollingEventSource(
            self.paths, interval_ms=poll_interval_ms, exclusions=self.exclusions
        )
        self.reporter = reporter or Reporter()
        self.session: WatchSession | None = None

    # ── Initial scan ────────────────────────────────────────

    def find_files(self) -> list[str]:
        return find_test_files(self.paths, self.patterns, self.exclusions)

    async def scan(self, files: Iterable[str]) -> dict[str, list[Smell]]:
        """Analyze ``files`` at most ``concurrency_limit`` at a time.

        Findings are reported per file as each run completes.
        """
        gate = self.session.gate if self.session else asyncio.Semaphore(self.concurrency_limit)
        results: dict[str, list[Smell]] = {}

        async def _one(path: str) -> None:
            results[path] = await self._analyze(path, gate)

        await asyncio.gather(*(_one(path) for path in dict.fromkeys(files)))
        return results

    async def _analyze(self, path: str, gate: asyncio.Semaphore) -> list[Smell]:
        async with gate:
            try:
                smells = await self.runner.run(path)
            except Exception:
                logger.exception("Detection run failed for %s", path)
                return []
        self.reporter.report(path, smells)
        return smells

    # ── Lifecycle ───────────────────────────────────────────

    async def start(self) -> WatchSession:
        """Run the initial scan, then subscribe to file events."""
        if self.session is not None:
            raise RuntimeError("Watcher already started")
        session = WatchSession(
            paths=self.paths, gate=asyncio.Semaphore(self.concurrency_limit)
        )
        self.session = session
        files = await asyncio.to_thread(self.find_files)
        if self.session is not session:
            return session
        logger.info("Initial scan: %d test files under %s", len(files), ", ".join(self.paths))
        scan = asyncio.get_running_loop().create_task(self.scan(files))
        session.track(scan)
        try:
            await scan
        except asyncio.CancelledError:
            if self.session is session:
                raise
        # stop() may have run during the scan; never subscribe a dead session.
        if self.session is not session:
            logger.info("Initial scan interrupted by stop()")
            return session
        self.event_source.start(self.on_event)
        logger.info("Watching for file changes...")
        return session

    async def watch(self) -> None:
        """Start and block until ``stop()`` is called."""
        session = await self.start()
        await session.stopped.wait()

    async def stop(self) -> None:
        """Stop the subscription, drop pending timers, cancel in-flight runs.

        Also interrupts an initial scan still in progress.
        """
        session, self.session = self.session, None
        if session is None:
            return
        await self.event_source.stop()
        for handle in session.timers.values():
            handle.cancel()
        session.timers.clear()
        tasks = list(session.tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        session.stopped.set()
        logger.info("Stopped watching %s", ", ".join(self.paths))

    async def drain(self) -> None:
        """Wait until no debounced run is in flight."""
        session = self.session
        while session is not None and session.tasks:
            await asyncio.gather(*list(session.tasks), return_exceptions=True)

    # ── Events ──────────────────────────────────────────────

    def on_event(self, event: FileEvent, path: str) -> None:
        """(Re)arm the debounce timer for ``path``."""
        session = self.session
        if session is None:
            return
        logger.debug("%s: %s", event, path)
        pending = session.timers.pop(path, None)
        if pending is not None:
            pending.cancel()
        loop = asyncio.get_running_loop()
        session.timers[path] = loop.call_later(
            self.debounce_ms / 1000, self._debounce_elapsed, session, path
        )

    def _debounce_elapsed(self, session: WatchSession, path: str) -> None:
        session.timers.pop(path, None)
        if self.session is not session:
            return
        session.track(asyncio.get_running_loop().create_task(self._analyze(path, session.gate)))


__all__ = ["WatchSession", "Watcher"]
