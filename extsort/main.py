#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Extension Sorter - command line entry point.

Usage:
    extsort [ROOT] [--dry-run] [--config PATH] [--report PATH]

Exit codes: 0 success, 1 invalid root or config, 2 some entries failed.
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .app.api import (
    ExecutionReport,
    RelocationPlan,
    compute_plan_stats,
    execute,
    plan,
    resolve_root,
    scan,
)
from .config import ConfigurationError, load_config
from .exceptions import ScannerError
from .logging_config import setup_logging
from .version import load_version

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses command line arguments."""
    parser = argparse.ArgumentParser(
        prog="extsort",
        description="Extension Sorter - move files into per-extension subdirectories",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Directory to organize (default: organizer.default_root from the config, else the current directory)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the plan without moving anything")
    parser.add_argument("--config", metavar="PATH", help="JSON config file to use instead of the bundled default")
    parser.add_argument("--report", metavar="PATH", help="Write the execution report to PATH")
    parser.add_argument(
        "--report-format",
        choices=["json", "csv"],
        default="json",
        help="Export format for --report (default: json)",
    )
    parser.add_argument("--move-directories", action="store_true", help="Also relocate non-bucket subdirectories")
    parser.add_argument("--skip-symlinks", action="store_true", help="Leave symbolic links where they are")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-json", action="store_true", help="Emit log records as JSON")
    parser.add_argument("--log-file", metavar="PATH", help="Also write logs to PATH")
    parser.add_argument("--version", action="store_true", help="Show version information")

    return parser.parse_args(argv)


def _display_path(path: str, root: Path) -> str:
    try:
        return os.path.relpath(path, str(root))
    except ValueError:
        return path


def print_plan(relocation_plan: RelocationPlan) -> None:
    root = Path(relocation_plan.root_path)
    for action in relocation_plan.actions:
        if action.is_move:
            print(f"{action.entry.name} -> {_display_path(action.planned_target_path, root)}")
        elif action.status == "skipped":
            logger.info("skip %s (%s)", action.entry.name, action.reason)


def print_report(report: ExecutionReport, show_moves: bool = True) -> None:
    root = Path(report.root_path)
    if show_moves:
        for move in report.moves:
            print(f"{Path(move.source_path).name} -> {_display_path(move.target_path, root)}")

    for failure in report.failures:
        print(f"{failure.name}: {failure.reason}", file=sys.stderr)

    prefix = "[dry-run] " if report.dry_run else ""
    print(
        f"{prefix}planned={report.planned} moved={report.moved} "
        f"skipped={report.skipped} failed={report.failed}"
    )


def write_report(report: ExecutionReport, output_path: str, fmt: str = "json") -> None:
    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)

    if fmt == "csv":
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["status", "name", "source_path", "target_path", "reason"])
            for move in report.moves:
                writer.writerow(["moved", Path(move.source_path).name, move.source_path, move.target_path, ""])
            for failure in report.failures:
                writer.writerow(["failed", failure.name, failure.source_path or "", "", failure.reason])
        return

    payload = {
        "root_path": report.root_path,
        "dry_run": report.dry_run,
        "totals": {
            "planned": report.planned,
            "moved": report.moved,
            "skipped": report.skipped,
            "failed": report.failed,
        },
        "moves": [
            {"source_path": move.source_path, "target_path": move.target_path}
            for move in report.moves
        ],
        "failures": [
            {"name": failure.name, "source_path": failure.source_path, "reason": failure.reason}
            for failure in report.failures
        ],
    }
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function: scan, plan and (unless --dry-run) execute."""
    args = parse_arguments(argv)

    if args.version:
        print(f"Extension Sorter v{load_version()}")
        return EXIT_OK

    try:
        cfg = load_config(args.config)
        settings = cfg.organizer_settings()
        log_settings = cfg.logging_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FATAL

    overrides = {}
    if args.move_directories:
        overrides["move_directories"] = True
    if args.skip_symlinks:
        overrides["skip_symlinks"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(
        log_level="DEBUG" if args.debug else log_settings.level,
        json_format=args.log_json or log_settings.json_format,
        log_file=args.log_file or log_settings.file,
    )

    if args.root is not None:
        root_arg = args.root
    else:
        root_arg = settings.default_root or os.getcwd()

    try:
        root = resolve_root(root_arg)
        entries = scan(root)
    except ScannerError as e:
        logger.error("Cannot organize %s: %s", root_arg, e, extra={"error": e.to_dict()})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL

    relocation_plan = plan(entries, root, settings)
    logger.debug("Plan stats: %s", compute_plan_stats(relocation_plan))

    if args.dry_run:
        print_plan(relocation_plan)
        report = execute(relocation_plan, settings, dry_run=True)
        print_report(report, show_moves=False)
    else:
        report = execute(relocation_plan, settings)
        print_report(report)

    if args.report:
        try:
            write_report(report, args.report, args.report_format)
        except OSError as e:
            logger.error("Failed to write report %s: %s", args.report, e)
            print(f"Failed to write report: {e}", file=sys.stderr)

    return EXIT_OK if report.ok else EXIT_PARTIAL


if __name__ == "__main__":
    raise SystemExit(main())
