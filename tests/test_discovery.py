"""Tests for snuts.discovery: test-file matching, exclusions, snapshots."""

from __future__ import annotations

import logging

import pytest

from snuts.discovery import find_test_files, is_test_file, matches_exclusion, snapshot_mtimes


def _touch(path, text="x();\n"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestIsTestFile:
    @pytest.mark.parametrize(
        "name",
        [
            "math.test.js",
            "math.spec.ts",
            "Button.test.tsx",
            "view.spec.jsx",
            "mathSpec.js",
            "api_test_helpers.ts",
        ],
    )
    def test_matches(self, name):
        assert is_test_file(name)

    @pytest.mark.parametrize("name", ["math.js", "setup.ts", "test.md", "spec.json"])
    def test_rejects(self, name):
        assert not is_test_file(name)


class TestMatchesExclusion:
    def test_component_match(self):
        assert matches_exclusion("src/fixtures/a.test.ts", "fixtures")

    def test_prefix_match(self):
        assert matches_exclusion("src/legacy/c.spec.js", "src/legacy")

    def test_no_substring_match(self):
        assert not matches_exclusion("src/fixturesX/a.test.ts", "fixtures")

    def test_glob_component(self):
        assert matches_exclusion("pkg/__snapshots__/a.test.ts", "__snap*")


class TestFindTestFiles:
    def test_walks_and_prunes(self, tmp_path):
        a = _touch(tmp_path / "src" / "a.test.ts")
        b = _touch(tmp_path / "b.spec.js")
        _touch(tmp_path / "node_modules" / "lib" / "c.test.js")
        _touch(tmp_path / "coverage" / "d.test.js")
        _touch(tmp_path / "src" / "util.ts")
        found = find_test_files([tmp_path])
        assert sorted(found) == sorted([str(a.resolve()), str(b.resolve())])

    def test_extra_exclusions(self, tmp_path):
        keep = _touch(tmp_path / "unit" / "a.test.js")
        _touch(tmp_path / "e2e" / "b.test.js")
        assert find_test_files([tmp_path], exclusions=["e2e"]) == [str(keep.resolve())]

    def test_file_root_and_dedup(self, tmp_path):
        f = _touch(tmp_path / "a.test.js")
        assert find_test_files([f, tmp_path, str(f)]) == [str(f.resolve())]

    def test_missing_path_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="snuts.discovery"):
            assert find_test_files([tmp_path / "missing"]) == []
        assert "does not exist" in caplog.text


class TestSnapshotMtimes:
    def test_tracks_source_files_only(self, tmp_path):
        src = _touch(tmp_path / "src" / "util.ts")
        test = _touch(tmp_path / "util.test.js")
        _touch(tmp_path / "README.md")
        _touch(tmp_path / "dist" / "bundle.js")
        snapshot = snapshot_mtimes([tmp_path])
        assert set(snapshot) == {str(src.resolve()), str(test.resolve())}
        assert snapshot[str(src.resolve())] == src.stat().st_mtime

    def test_missing_root(self, tmp_path):
        assert snapshot_mtimes([tmp_path / "nope"]) == {}
