"""Shared constants: test-file patterns, aliases, and detector thresholds."""

from __future__ import annotations

TEST_FILE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")

# Basename globs; each stem is expanded for every extension above.
_TEST_FILE_STEMS = (
    "*.test",
    "*.tests",
    "*.spec",
    "*.specs",
    "*test_*",
    "*test-*",
    "*Spec*",
)

TEST_FILE_PATTERNS: tuple[str, ...] = tuple(
    f"{stem}{ext}" for ext in TEST_FILE_EXTENSIONS for stem in _TEST_FILE_STEMS
)

# Anything the watcher reacts to once the initial scan is done.
SOURCE_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts")

# Dependency and build-output directories; pruned during traversal.
DEFAULT_EXCLUSIONS = frozenset(
    {
        "node_modules",
        ".git",
        "dist",
        "build",
        "coverage",
        ".next",
        ".nuxt",
        ".output",
        ".turbo",
        ".cache",
        ".svn",
        ".hg",
    }
)

TEST_ALIASES = ("it", "test", "xit", "fit", "xtest")
SUITE_ALIASES = ("describe", "xdescribe", "fdescribe")
HOOK_NAMES = ("beforeAll", "beforeEach", "afterAll", "afterEach")
CALL_MODIFIERS = ("skip", "only", "todo", "concurrent", "failing")

ASSERTION_ROOT = "expect"

MAX_COMMENTS_PER_TEST = 5
ANONYMOUS_MAX_WORDS = 2
SNIPPET_MAX_CHARS = 400

DEFAULT_DEBOUNCE_MS = 200
DEFAULT_CONCURRENCY_LIMIT = 10
DEFAULT_POLL_INTERVAL_MS = 250

SNIPPET_FALLBACK = "// Unable to extract code snippet"
