"""Command line entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TextIO

from tag_finder.analysis import analyze_directory, find_word
from tag_finder.config import AppConfig, CliOverrides, load_effective_config
from tag_finder.execution import ConsoleProgressObserver, ProgressObserver, fan_out
from tag_finder.logging import JsonlEventLogger, JsonlProgressObserver
from tag_finder.reporting import (
    render_by_file,
    render_detailed,
    render_preview,
    render_word_results,
)
from tag_finder.server import BridgeServer


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for the tag-finder command."""
    parser = argparse.ArgumentParser(
        prog="tag-finder", description="Find unused classes in CSS/SCSS files"
    )
    parser.add_argument("--config", required=False, default=None)
    parser.add_argument("--threads", type=int, required=False, default=None)
    parser.add_argument("--no-progress", action="store_true")
    parser.add_argument("--event-log", required=False, default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    find = subparsers.add_parser(
        "find-word", help="Find a specific word that appears only in CSS/SCSS files"
    )
    find.add_argument("-w", "--word", required=True)
    find.add_argument("-d", "--directory", default=".")
    find.add_argument("-a", "--all", action="store_true", help="Show all matches")

    unused = subparsers.add_parser(
        "unused-classes", help="Analyze all CSS classes and find unused ones"
    )
    unused.add_argument("-d", "--directory", default=".")
    unused.add_argument("-b", "--by-file", action="store_true")
    unused.add_argument("--detailed", action="store_true")
    unused.add_argument("--json", action="store_true")

    serve = subparsers.add_parser("serve", help="Serve JSON-line requests on stdin/stdout")
    serve.add_argument("--audit-log", required=False, default=None)
    return parser


def main(
    argv: list[str] | None = None,
    out_stream: TextIO | None = None,
    err_stream: TextIO | None = None,
    in_stream: TextIO | None = None,
) -> int:
    """Entrypoint for the tag-finder command."""
    out = out_stream or sys.stdout
    err = err_stream or sys.stderr
    args = build_arg_parser().parse_args(argv)
    try:
        config = load_effective_config(
            base_dir=Path.cwd(),
            config_path=Path(args.config) if args.config is not None else None,
            overrides=CliOverrides(
                thread_count=args.threads,
                progress_enabled=False if args.no_progress else None,
            ),
        )
        observer = _build_observer(config, args.event_log, err)
        if args.command == "find-word":
            _run_find_word(args, config, observer, out)
        elif args.command == "unused-classes":
            _run_unused_classes(args, config, observer, out)
        else:
            audit_logger = JsonlEventLogger(Path(args.audit_log)) if args.audit_log else None
            server = BridgeServer(config=config, audit_logger=audit_logger, observer=observer)
            server.serve(in_stream=in_stream or sys.stdin, out_stream=out)
    except (OSError, ValueError, RuntimeError) as error:
        err.write(f"Error: {error}\n")
        return 1
    return 0


def _build_observer(config: AppConfig, event_log: str | None, err: TextIO) -> ProgressObserver:
    observers: list[ProgressObserver] = []
    if config.execution.progress_enabled:
        observers.append(ConsoleProgressObserver(err))
    if event_log is not None:
        observers.append(JsonlProgressObserver(JsonlEventLogger(Path(event_log))))
    return fan_out(*observers)


def _run_find_word(
    args: argparse.Namespace,
    config: AppConfig,
    observer: ProgressObserver,
    out: TextIO,
) -> None:
    result = find_word(args.word, args.directory, config=config, observer=observer)
    if args.all or result.is_css_only:
        lines = render_word_results(args.word, result)
    elif result.found:
        lines = [f"Word '{args.word}' found but not CSS-only. Use --all to see details."]
    else:
        lines = [f"Word '{args.word}' not found in any files."]
    _write_lines(out, lines)


def _run_unused_classes(
    args: argparse.Namespace,
    config: AppConfig,
    observer: ProgressObserver,
    out: TextIO,
) -> None:
    report = analyze_directory(args.directory, config=config, observer=observer)
    if args.json:
        out.write(f"{json.dumps(report.to_dict(), indent=2, sort_keys=True)}\n")
        return
    if args.detailed:
        lines = render_detailed(report)
    elif args.by_file:
        lines = render_by_file(report)
    else:
        lines = render_preview(report)
    _write_lines(out, lines)


def _write_lines(out: TextIO, lines: list[str]) -> None:
    for line in lines:
        out.write(f"{line}\n")


if __name__ == "__main__":
    raise SystemExit(main())
