"""Project config (.snuts/config.json)."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from snuts.constants import (
    ANONYMOUS_MAX_WORDS,
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_POLL_INTERVAL_MS,
    HOOK_NAMES,
    MAX_COMMENTS_PER_TEST,
    SNIPPET_MAX_CHARS,
    SUITE_ALIASES,
    TEST_ALIASES,
)
from snuts.tree.shape import AliasConfig

PROJECT_ROOT = Path(os.environ.get("SNUTS_ROOT", Path.cwd())).resolve()
CONFIG_FILE = PROJECT_ROOT / ".snuts" / "config.json"
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "debounce_ms": ConfigKey(
        int, DEFAULT_DEBOUNCE_MS, "Quiet period after a file event before re-analysis"
    ),
    "concurrency_limit": ConfigKey(
        int, DEFAULT_CONCURRENCY_LIMIT, "Max files analyzed at the same time"
    ),
    "poll_interval_ms": ConfigKey(
        int, DEFAULT_POLL_INTERVAL_MS, "How often watched paths are polled for changes"
    ),
    "max_comments_per_test": ConfigKey(
        int, MAX_COMMENTS_PER_TEST, "Comments a test may carry before it is overcommented"
    ),
    "anonymous_max_words": ConfigKey(
        int, ANONYMOUS_MAX_WORDS, "Descriptions with at most this many words are anonymous"
    ),
    "snippet_max_chars": ConfigKey(
        int, SNIPPET_MAX_CHARS, "Code snippet length in reports (0 = unlimited)"
    ),
    "verbose": ConfigKey(bool, False, "Also report files with no smells"),
    "exclude": ConfigKey(list, [], "Path patterns to exclude from discovery and watching"),
    "test_aliases": ConfigKey(list, list(TEST_ALIASES), "Functions that declare a test case"),
    "suite_aliases": ConfigKey(list, list(SUITE_ALIASES), "Functions that declare a suite"),
    "hook_names": ConfigKey(list, list(HOOK_NAMES), "Lifecycle hook functions"),
}


def default_config() -> dict[str, Any]:
    """Return a config dict with all keys set to their defaults."""
    return {k: copy.deepcopy(v.default) for k, v in CONFIG_SCHEMA.items()}


def _coerce(key: str, value: object) -> object:
    """Return ``value`` when it has the schema type, else the key's default."""
    schema = CONFIG_SCHEMA[key]
    # bool is an int subclass; keep them apart.
    if schema.type is int and isinstance(value, bool):
        valid = False
    else:
        valid = isinstance(value, schema.type)
    if schema.type is int and valid and value < 0:
        valid = False
    if valid:
        return value
    logger.warning("Ignoring invalid config value %s=%r", key, value)
    return copy.deepcopy(schema.default)


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from disk, filling missing or invalid keys with defaults."""
    p = path or CONFIG_FILE
    config: dict[str, Any] = {}
    if p.exists():
        try:
            loaded = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Unreadable config %s, using defaults: %s", p, exc)
            loaded = {}
        if isinstance(loaded, dict):
            config = loaded

    for key, schema in CONFIG_SCHEMA.items():
        if key not in config:
            config[key] = copy.deepcopy(schema.default)
        else:
            config[key] = _coerce(key, config[key])
    return config


def save_config(config: dict, path: Path | None = None) -> Path:
    """Write ``config`` as JSON, replacing the target file in one rename."""
    target = path or CONFIG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "w", dir=target.parent, suffix=".tmp", delete=False, encoding="utf-8"
    )
    try:
        with handle:
            json.dump(config, handle, indent=2)
            handle.write("\n")
        os.replace(handle.name, target)
    except Exception:
        Path(handle.name).unlink(missing_ok=True)
        raise
    return target


def add_exclude_pattern(config: dict, pattern: str) -> bool:
    """Append a pattern to the exclude list; False if it was already there."""
    excludes = config.setdefault("exclude", [])
    if pattern in excludes:
        return False
    excludes.append(pattern)
    return True


def alias_config(config: dict[str, Any]) -> AliasConfig:
    return AliasConfig(
        tests=tuple(config["test_aliases"]),
        suites=tuple(config["suite_aliases"]),
        hooks=tuple(config["hook_names"]),
    )
