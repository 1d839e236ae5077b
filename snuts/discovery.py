"""File discovery: test-file globbing, exclusion matching, and mtime snapshots."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from snuts.constants import DEFAULT_EXCLUSIONS, SOURCE_EXTENSIONS, TEST_FILE_PATTERNS

logger = logging.getLogger(__name__)

__all__ = [
    "find_test_files",
    "is_test_file",
    "matches_exclusion",
    "snapshot_mtimes",
]


def matches_exclusion(rel_path: str, exclusion: str) -> bool:
    """Check if a relative path matches an exclusion pattern (path-component aware).

    Matches if exclusion is a path component (e.g. "fixtures" matches
    "fixtures/a.test.ts" or "src/fixtures/b.test.ts") or a directory prefix
    (e.g. "src/legacy" matches "src/legacy/c.spec.js"). Does NOT do substring
    matching. Glob-style ``*`` is matched per component.
    """
    parts = Path(rel_path).parts
    if exclusion in parts:
        return True
    if "*" in exclusion and any(fnmatch.fnmatch(part, exclusion) for part in parts):
        return True
    if "/" in exclusion or os.sep in exclusion:
        normalized = exclusion.rstrip("/").rstrip(os.sep)
        return rel_path.startswith(normalized + "/") or rel_path.startswith(
            normalized + os.sep
        )
    return False


def _is_excluded_dir(name: str, rel_path: str, extra: tuple[str, ...]) -> bool:
    if name in DEFAULT_EXCLUSIONS:
        return True
    return any(
        matches_exclusion(rel_path, exclusion) or exclusion == name for exclusion in extra
    )


def _walk(root: Path, extra: tuple[str, ...]) -> Iterator[Path]:
    """Yield files under ``root`` (or ``root`` itself), pruning excluded dirs."""
    if root.is_file():
        yield root
        return
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root).replace("\\", "/")
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not _is_excluded_dir(d, d if rel_dir == "." else f"{rel_dir}/{d}", extra)
        )
        for fname in sorted(filenames):
            full = Path(dirpath) / fname
            rel_file = os.path.relpath(full, root).replace("\\", "/")
            if extra and any(matches_exclusion(rel_file, ex) for ex in extra):
                continue
            yield full


def is_test_file(path: str | Path, patterns: Iterable[str] = TEST_FILE_PATTERNS) -> bool:
    name = Path(path).name
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def find_test_files(
    paths: Iterable[str | Path],
    patterns: Iterable[str] = TEST_FILE_PATTERNS,
    exclusions: Iterable[str] = (),
) -> list[str]:
    """Absolute, deduplicated test files under ``paths`` in discovery order."""
    patterns = tuple(patterns)
    extra = tuple(exclusions)
    seen: set[str] = set()
    files: list[str] = []
    for raw in paths:
        root = Path(raw).resolve()
        if not root.exists():
            logger.warning("Watch path does not exist: %s", root)
            continue
        for candidate in _walk(root, extra):
            if not is_test_file(candidate, patterns):
                continue
            resolved = str(candidate.resolve())
            if resolved not in seen:
                seen.add(resolved)
                files.append(resolved)
    return files


def snapshot_mtimes(
    paths: Iterable[str | Path],
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    exclusions: Iterable[str] = (),
) -> dict[str, float]:
    """Map every watched source file to its modification time."""
    ext_set = tuple(extensions)
    extra = tuple(exclusions)
    mtimes: dict[str, float] = {}
    for raw in paths:
        root = Path(raw).resolve()
        if not root.exists():
            continue
        for candidate in _walk(root, extra):
            if not candidate.name.endswith(ext_set):
                continue
            try:
                mtimes[str(candidate.resolve())] = candidate.stat().st_mtime
            except OSError as exc:
                # Deleted between listing and stat.
                logger.debug("Skipping vanished file %s (%s)", candidate, exc)
    return mtimes
