"""Tests for snuts.core.events: snapshot diffs and the polling event source."""

from __future__ import annotations

import asyncio
import logging
import os

import pytest

from snuts.core.events import PollingEventSource, diff_snapshots
from snuts.enums import FileEvent


class TestDiffSnapshots:
    def test_add_and_change(self):
        previous = {"/a.test.js": 1.0, "/b.test.js": 1.0}
        current = {"/a.test.js": 1.0, "/b.test.js": 2.0, "/c.test.js": 1.0}
        assert diff_snapshots(previous, current) == [
            (FileEvent.CHANGE, "/b.test.js"),
            (FileEvent.ADD, "/c.test.js"),
        ]

    def test_deletions_are_silent(self):
        assert diff_snapshots({"/gone.test.js": 1.0}, {}) == []

    def test_identical(self):
        snap = {"/a.test.js": 5.0}
        assert diff_snapshots(snap, dict(snap)) == []


class TestPollingEventSource:
    @pytest.mark.asyncio
    async def test_reports_new_and_modified_files(self, tmp_path):
        existing = tmp_path / "a.test.js"
        existing.write_text("it('a', () => {});")
        events: list[tuple[FileEvent, str]] = []
        source = PollingEventSource([str(tmp_path)], interval_ms=20)
        source.start(lambda event, path: events.append((event, path)))
        await asyncio.sleep(0.1)

        added = tmp_path / "b.spec.ts"
        added.write_text("test('b', () => {});")
        stat = existing.stat()
        os.utime(existing, (stat.st_atime, stat.st_mtime + 10))
        await asyncio.sleep(0.15)
        await source.stop()

        assert (FileEvent.ADD, str(added.resolve())) in events
        assert (FileEvent.CHANGE, str(existing.resolve())) in events

    @pytest.mark.asyncio
    async def test_ignores_other_extensions_and_exclusions(self, tmp_path):
        events = []
        source = PollingEventSource([str(tmp_path)], interval_ms=20, exclusions=["fixtures"])
        source.start(lambda event, path: events.append(path))
        await asyncio.sleep(0.1)

        (tmp_path / "notes.md").write_text("# notes")
        (tmp_path / "fixtures").mkdir()
        (tmp_path / "fixtures" / "f.test.js").write_text("x();")
        await asyncio.sleep(0.15)
        await source.stop()

        assert events == []

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_polling(self, tmp_path, caplog):
        seen: list[str] = []

        def _handler(event, path):
            seen.append(path)
            if len(seen) == 1:
                raise RuntimeError("handler blew up")

        source = PollingEventSource([str(tmp_path)], interval_ms=20)
        source.start(_handler)
        await asyncio.sleep(0.1)

        with caplog.at_level(logging.ERROR, logger="snuts.core.events"):
            first = tmp_path / "a.test.js"
            first.write_text("it('a', () => {});")
            await asyncio.sleep(0.15)
            second = tmp_path / "b.test.js"
            second.write_text("it('b', () => {});")
            await asyncio.sleep(0.15)
        await source.stop()

        assert str(first.resolve()) in seen
        assert str(second.resolve()) in seen
        assert "handler blew up" in caplog.text

    @pytest.mark.asyncio
    async def test_snapshot_errors_are_logged_and_retried(self, tmp_path, monkeypatch, caplog):
        calls = 0
        original = PollingEventSource._snapshot

        def _flaky(self):
            nonlocal calls
            calls += 1
            if calls == 2:
                raise ValueError("bad stat")
            return original(self)

        monkeypatch.setattr(PollingEventSource, "_snapshot", _flaky)
        events = []
        source = PollingEventSource([str(tmp_path)], interval_ms=20)
        with caplog.at_level(logging.ERROR, logger="snuts.core.events"):
            source.start(lambda event, path: events.append(path))
            await asyncio.sleep(0.1)
            added = tmp_path / "late.test.js"
            added.write_text("x();")
            await asyncio.sleep(0.15)
        await source.stop()

        assert "File poll failed" in caplog.text
        assert str(added.resolve()) in events

    @pytest.mark.asyncio
    async def test_double_start_rejected(self, tmp_path):
        source = PollingEventSource([str(tmp_path)], interval_ms=20)
        source.start(lambda event, path: None)
        with pytest.raises(RuntimeError):
            source.start(lambda event, path: None)
        await source.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self, tmp_path):
        await PollingEventSource([str(tmp_path)]).stop()
