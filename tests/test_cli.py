"""Tests for snuts.cli: argument parsing, config merge, one-shot scan."""

from __future__ import annotations

import json

import pytest

from snuts.cli import build_watcher, create_parser, main
from snuts.config import default_config

SMELLY = 'describe("math", () => {\n  it("x", () => {\n    if (ready) { expect(1).toBe(1); }\n  });\n});\n'
CLEAN = 'describe("math", () => {\n  it("adds two numbers", () => {\n    expect(1 + 1).toBe(2);\n  });\n});\n'


class TestParser:
    def test_comma_separated_paths(self):
        args = create_parser().parse_args(["watch", "src, test ,"])
        assert args.command == "watch"
        assert args.paths == ["src", "test"]
        assert args.debounce_ms is None

    def test_scan_flags(self):
        args = create_parser().parse_args(
            ["scan", "src", "--concurrency", "3", "--exclude", "e2e", "--exclude", "fixtures", "-v"]
        )
        assert args.concurrency == 3
        assert args.exclude == ["e2e", "fixtures"]
        assert args.verbose is True

    def test_empty_paths_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["scan", ","])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_no_abbreviations(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["watch", "src", "--debounce", "10"])


class TestBuildWatcher:
    def test_cli_overrides_config(self):
        config = default_config()
        config["exclude"] = ["fixtures", "e2e"]
        args = create_parser().parse_args(
            ["watch", "src", "--debounce-ms", "0", "--concurrency", "2", "--exclude", "e2e"]
        )
        watcher = build_watcher(args, config)
        assert watcher.debounce_ms == 0
        assert watcher.concurrency_limit == 2
        assert watcher.exclusions == ("e2e", "fixtures")
        assert len(watcher.runner.detectors) == 6

    def test_config_used_when_flags_absent(self):
        config = default_config()
        config["debounce_ms"] = 750
        watcher = build_watcher(create_parser().parse_args(["scan", "src"]), config)
        assert watcher.debounce_ms == 750
        assert watcher.concurrency_limit == 10

    def test_invalid_concurrency(self):
        args = create_parser().parse_args(["scan", "src", "--concurrency", "0"])
        with pytest.raises(ValueError):
            build_watcher(args, default_config())


class TestScanCommand:
    def test_exit_code_1_when_smells_found(self, tmp_path, capsys):
        (tmp_path / "math.test.js").write_text(SMELLY)
        with pytest.raises(SystemExit) as excinfo:
            main(["scan", str(tmp_path), "--config", str(tmp_path / "missing.json")])
        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "Conditional test logic detected (if statement)" in captured.out
        assert "smell(s) in 1 file(s)" in captured.err

    def test_exit_code_0_when_clean(self, tmp_path, capsys):
        (tmp_path / "math.test.js").write_text(CLEAN)
        with pytest.raises(SystemExit) as excinfo:
            main(["scan", str(tmp_path), "--config", str(tmp_path / "missing.json")])
        assert excinfo.value.code == 0
        assert "0 smell(s) in 1 file(s)" in capsys.readouterr().err

    def test_exclusions_from_flag_and_config(self, tmp_path, capsys):
        (tmp_path / "math.test.js").write_text(SMELLY)
        cfg = tmp_path / "config.json"
        cfg.write_text(json.dumps({"exclude": ["fixtures"]}))
        (tmp_path / "fixtures").mkdir()
        (tmp_path / "fixtures" / "data.test.js").write_text(SMELLY)
        (tmp_path / "ignored").mkdir()
        (tmp_path / "ignored" / "other.test.js").write_text(SMELLY)
        with pytest.raises(SystemExit):
            main(["scan", str(tmp_path), "--config", str(cfg), "--exclude", "ignored"])
        assert "in 1 file(s)" in capsys.readouterr().err


class TestExcludeCommand:
    def test_adds_pattern_and_creates_config(self, tmp_path, capsys):
        cfg = tmp_path / ".snuts" / "config.json"
        main(["exclude", "e2e", "--config", str(cfg)])
        assert json.loads(cfg.read_text())["exclude"] == ["e2e"]
        assert "Added exclude pattern: e2e" in capsys.readouterr().out

    def test_existing_pattern_not_duplicated(self, tmp_path, capsys):
        cfg = tmp_path / "config.json"
        cfg.write_text(json.dumps({"exclude": ["e2e"], "debounce_ms": 900}))
        main(["exclude", "e2e", "--config", str(cfg)])
        saved = json.loads(cfg.read_text())
        assert saved == {"exclude": ["e2e"], "debounce_ms": 900}
        assert "Already excluded" in capsys.readouterr().out

    def test_saved_pattern_applies_to_scan(self, tmp_path, capsys):
        cfg = tmp_path / "config.json"
        (tmp_path / "e2e").mkdir()
        (tmp_path / "e2e" / "flow.test.js").write_text(SMELLY)
        (tmp_path / "unit.test.js").write_text(CLEAN)
        main(["exclude", "e2e", "--config", str(cfg)])
        with pytest.raises(SystemExit) as excinfo:
            main(["scan", str(tmp_path), "--config", str(cfg)])
        assert excinfo.value.code == 0
        assert "0 smell(s) in 1 file(s)" in capsys.readouterr().err

    def test_save_failure_exits_1(self, tmp_path, monkeypatch, capsys):
        def _fail(config, path=None):
            raise OSError("read-only file system")

        monkeypatch.setattr("snuts.cli.save_config", _fail)
        with pytest.raises(SystemExit) as excinfo:
            main(["exclude", "e2e", "--config", str(tmp_path / "config.json")])
        assert excinfo.value.code == 1
        assert "read-only file system" in capsys.readouterr().err
