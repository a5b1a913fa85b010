from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from mcp_error_scanner.core.config import ScanConfig, resolve_scan_config
from mcp_error_scanner.core.errors import InvalidInputError, ScanError
from mcp_error_scanner.core.models import ErrorLine, ScanResult, ScanWarning
from mcp_error_scanner.core.scan_service import scan_directory

DEFAULT_ROOT = "/var/log"
MAX_ATTEMPTS = 3


def _is_root_user() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def _format_timestamp(entry: ErrorLine) -> str:
    if entry.timestamp is None:
        return "Unknown time"
    return entry.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def header_lines(*, privileged: bool, now: datetime | None = None) -> list[str]:
    now = now or datetime.now()
    lines = [
        "Error scanner",
        "=============",
        f"Time: {now:%Y-%m-%d %H:%M:%S}",
    ]
    if not privileged:
        lines.append("Warning: not running as root; some directories may not be accessible.")
    return lines


def candidate_lines(files: Sequence[Path], root: Path) -> list[str]:
    out: list[str] = ["Files to be scanned:"]
    for i, path in enumerate(files, start=1):
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        out.append(f"  [{i:02d}] {shown}")
    return out


def _print_error(message: str) -> None:
    print(message, file=sys.stderr)


def confirm_scan(
    *,
    read: Callable[[str], str] | None = None,
    warn: Callable[[str], None] | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> bool:
    """Ask y/n (default yes); raise InvalidInputError after max_attempts bad answers."""
    read = read or input
    warn = warn or _print_error
    for _ in range(max_attempts):
        try:
            choice = read("Proceed with scanning? (Y/n, default: y) ").strip().lower()
        except EOFError:
            warn("Failed to read input")
            continue
        if choice in ("", "y", "yes"):
            return True
        if choice in ("n", "no"):
            return False
        warn("Please enter 'y' or 'n'")
    raise InvalidInputError("Maximum input attempts exceeded")


def report_lines(result: ScanResult) -> list[str]:
    out: list[str] = []
    if result.stats.total_errors > 0:
        out.append("Errors Found:")
        out.append("=============")
        for name, entries in result.report.items():
            noun = "error" if len(entries) == 1 else "errors"
            out.append("")
            out.append(f"{name} ({len(entries)} {noun})")
            for entry in entries:
                out.append(f"  Line {entry.line_number} - [{_format_timestamp(entry)}] {entry.content}")
    else:
        out.append("No errors found in processed files.")

    stats = result.stats
    out.extend(
        [
            "",
            "Scan Statistics:",
            f"  Scan time: {int(result.duration * 1000)} ms",
            f"  Total files scanned: {stats.processed_files}",
            f"  Total errors found: {stats.total_errors}",
            f"  Files skipped: {stats.skipped_files}",
            f"  Large files encountered: {stats.large_files}",
        ]
    )
    return out


def _print_warning(warning: ScanWarning) -> None:
    print(f"warning: {warning}", file=sys.stderr)


def _print_progress(done: int, total: int) -> None:
    end = "\n" if done == total else ""
    print(f"\rScanned {done}/{total}", end=end, file=sys.stderr, flush=True)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Scan a directory tree for lines mentioning errors.")
    p.add_argument("root", nargs="?", default=DEFAULT_ROOT, help=f"Directory to scan (default: {DEFAULT_ROOT})")
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    p.add_argument("--workers", type=int, default=None, help="Worker threads (default: min(32, CPUs))")
    p.add_argument("--timeout", type=float, default=None, help="Per-file time budget in seconds (default: 30)")
    return p


def _config_from_args(args: argparse.Namespace) -> ScanConfig:
    cfg = resolve_scan_config()
    overrides: dict[str, object] = {}
    if args.workers is not None:
        if args.workers < 1:
            raise ValueError("--workers must be >= 1")
        overrides["max_workers"] = args.workers
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ValueError("--timeout must be > 0")
        overrides["timeout_seconds"] = args.timeout
    return replace(cfg, **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    level_name = os.getenv("ERROR_SCAN_LOG_LEVEL", "ERROR").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.ERROR),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    for line in header_lines(privileged=_is_root_user()):
        print(line)

    root = Path(args.root).expanduser()
    print(f"\nScanning directory: {root}")

    def _confirm(files: Sequence[Path]) -> bool:
        print()
        for line in candidate_lines(files, root):
            print(line)
        if args.yes or not files:
            return True
        return confirm_scan()

    try:
        cfg = _config_from_args(args)
        result = asyncio.run(
            scan_directory(
                root,
                config=cfg,
                on_warning=_print_warning,
                on_progress=_print_progress,
                confirm=_confirm,
            )
        )
    except (InvalidInputError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)
    except ScanError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(1)

    if result is None:
        print("Scan cancelled by user.")
        return

    print()
    for line in report_lines(result):
        print(line)


if __name__ == "__main__":
    main()
