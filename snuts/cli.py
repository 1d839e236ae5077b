"""CLI entry point: parse args, load config, start a watch or one-shot scan."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as get_version
from pathlib import Path

from snuts.config import (
    CONFIG_FILE,
    add_exclude_pattern,
    alias_config,
    load_config,
    save_config,
)
from snuts.core.watcher import Watcher
from snuts.detectors import default_detectors
from snuts.output import Reporter, colorize
from snuts.tree.service import TreeService

logger = logging.getLogger(__name__)

USAGE_EXAMPLES = """
examples:
  snuts watch src,test
  snuts watch . --debounce-ms 500 --concurrency 4
  snuts scan packages/api --exclude fixtures
  snuts exclude e2e
"""


class _NoAbbrevArgumentParser(argparse.ArgumentParser):
    """Argparse parser variant that disables long-option abbreviation."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(*args, **kwargs)


def _cli_version_string() -> str:
    try:
        return f"snuts {get_version('snuts')}"
    except PackageNotFoundError:
        return "snuts (version unknown)"


def _split_paths(raw: str) -> list[str]:
    paths = [p.strip() for p in raw.split(",") if p.strip()]
    if not paths:
        raise argparse.ArgumentTypeError("expected at least one path")
    return paths


def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "paths",
        type=_split_paths,
        help="Comma-separated files or directories to analyze",
    )
    p.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Max files analyzed at once (default: config concurrency_limit)",
    )
    p.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Path pattern to exclude (component/prefix match; repeatable)",
    )
    p.add_argument("--config", type=Path, default=None, help="Path to config.json")
    p.add_argument(
        "--verbose", "-v", action="store_true", help="Report clean files and debug logs"
    )


def create_parser() -> argparse.ArgumentParser:
    parser = _NoAbbrevArgumentParser(
        prog="snuts",
        description="Detect test smells in JavaScript/TypeScript test files",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", "-V", action="version", version=_cli_version_string())
    sub = parser.add_subparsers(
        dest="command", required=True, parser_class=_NoAbbrevArgumentParser
    )

    p_watch = sub.add_parser("watch", help="Watch files for changes and detect test smells")
    _add_common_arguments(p_watch)
    p_watch.add_argument(
        "--debounce-ms",
        type=int,
        default=None,
        help="Quiet period before re-analyzing a changed file (default: 200)",
    )

    p_scan = sub.add_parser("scan", help="Analyze test files once and exit")
    _add_common_arguments(p_scan)

    p_exclude = sub.add_parser(
        "exclude", help="Add a path pattern to the config exclude list"
    )
    p_exclude.add_argument("pattern", help="Component, prefix or glob pattern to exclude")
    p_exclude.add_argument("--config", type=Path, default=None, help="Path to config.json")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_watcher(args, config: dict) -> Watcher:
    """Merge CLI flags over config and build a watcher with the built-in detectors."""
    service = TreeService(aliases=alias_config(config))
    detectors = default_detectors(
        service,
        max_comments=config["max_comments_per_test"],
        anonymous_max_words=config["anonymous_max_words"],
    )
    cli_exclusions = args.exclude or []
    exclusions = list(cli_exclusions) + [
        e for e in config["exclude"] if e not in cli_exclusions
    ]
    debounce_ms = getattr(args, "debounce_ms", None)
    return Watcher(
        args.paths,
        detectors,
        debounce_ms=config["debounce_ms"] if debounce_ms is None else debounce_ms,
        concurrency_limit=(
            config["concurrency_limit"] if args.concurrency is None else args.concurrency
        ),
        poll_interval_ms=config["poll_interval_ms"],
        exclusions=exclusions,
        service=service,
        reporter=Reporter(
            verbose=args.verbose or config["verbose"],
            snippet_max_chars=config["snippet_max_chars"],
        ),
    )


def cmd_exclude(args) -> None:
    """Persist an exclude pattern so later scans and watches skip it."""
    path = args.config or CONFIG_FILE
    config = load_config(path)
    if not add_exclude_pattern(config, args.pattern):
        print(colorize(f"Already excluded: {args.pattern}", "dim"))
        return
    try:
        save_config(config, path)
    except OSError as exc:
        print(colorize(f"Could not save config {path}: {exc}", "red"), file=sys.stderr)
        sys.exit(1)
    print(colorize(f"Added exclude pattern: {args.pattern}", "green"))


async def _scan(watcher: Watcher) -> int:
    files = await asyncio.to_thread(watcher.find_files)
    results = await watcher.scan(files)
    total = sum(len(smells) for smells in results.values())
    summary = f"{total} smell(s) in {len(results)} file(s)"
    print(colorize(summary, "yellow" if total else "green"), file=sys.stderr)
    return 1 if total else 0


def main(argv: list[str] | None = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))
    if args.command == "exclude":
        cmd_exclude(args)
        return
    config = load_config(args.config)
    try:
        watcher = build_watcher(args, config)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        if args.command == "scan":
            sys.exit(asyncio.run(_scan(watcher)))
        asyncio.run(watcher.watch())
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
