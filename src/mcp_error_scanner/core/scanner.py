"""Bounded, line-oriented scan of a single file.

Reads the file in binary mode through a large buffer and keeps every line
whose lowercase form contains "error". The per-file time budget is checked
once per line; a single slow read is not interrupted.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from .config import ScanConfig, default_scan_config
from .errors import (
    FileEncodingError,
    FileProcessingError,
    FileSizeError,
    ScanError,
    ScanNotFoundError,
    ScanPermissionError,
    ScanTimeoutError,
)
from .models import ErrorLine, FileScanOutcome, ScanWarning

logger = logging.getLogger(__name__)

ERROR_TOKEN = "error"

Clock = Callable[[], float]
WarningSink = Callable[[ScanWarning], None]
LargeFileHook = Callable[[Path, int], None]


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if value < 1024 or unit == "GiB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.2f} {unit}"
        value /= 1024
    return f"{size} B"


def _strip_eol(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _open(path: Path, buffer_size: int):
    try:
        return open(path, "rb", buffering=buffer_size)
    except PermissionError as exc:
        raise ScanPermissionError(f"Access denied to file {path}") from exc
    except UnicodeError as exc:
        raise FileEncodingError(f"Invalid file encoding in {path}") from exc
    except (OSError, ValueError) as exc:
        raise FileProcessingError(path, str(exc)) from exc


def scan_file(
    path: str | Path,
    *,
    config: ScanConfig | None = None,
    clock: Clock = time.monotonic,
    on_warning: WarningSink | None = None,
    on_large_file: LargeFileHook | None = None,
) -> list[ErrorLine]:
    """Return the error lines of one file in line order.

    Raises a ScanError subclass when the file is missing, unreadable, over the
    size ceiling or over its time budget. Partial matches are discarded on
    timeout.
    """
    cfg = config or default_scan_config()
    path = Path(path)
    try:
        os.fsencode(path)
    except UnicodeError as exc:
        raise FileEncodingError(f"Invalid file name encoding in {path!r}") from exc
    if not path.exists():
        raise ScanNotFoundError(f"File {path} does not exist")

    with _open(path, cfg.read_buffer_size) as f:
        try:
            st = os.fstat(f.fileno())
        except OSError as exc:
            raise FileProcessingError(path, f"Failed to read file metadata: {exc}") from exc

        size = st.st_size
        if size > cfg.max_file_size:
            raise FileSizeError(
                f"File {path} exceeds maximum size limit of {_format_size(cfg.max_file_size)}"
            )
        if size > cfg.large_file_threshold:
            logger.warning("Large file detected: %s (%s), processing may take time", path, _format_size(size))
            if on_large_file is not None:
                on_large_file(path, size)

        modified: datetime | None
        try:
            modified = datetime.fromtimestamp(st.st_mtime, tz=UTC)
        except (OverflowError, OSError, ValueError):
            logger.debug("Unrepresentable mtime for %s: %r", path, st.st_mtime)
            modified = None

        error_lines: list[ErrorLine] = []
        start = clock()
        line_no = 0

        while True:
            if clock() - start > cfg.timeout_seconds:
                raise ScanTimeoutError(
                    f"Processing of file {path} timed out after {cfg.timeout_seconds:g} seconds"
                )

            line_no += 1
            try:
                raw = f.readline()
            except OSError as exc:
                message = f"Line {line_no}: {exc}"
                logger.warning("%s: %s", path, message)
                if on_warning is not None:
                    on_warning(ScanWarning(path=path, message=message))
                continue

            if not raw:
                break

            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                continue

            line = _strip_eol(line)
            if ERROR_TOKEN in line.lower():
                error_lines.append(ErrorLine(line_number=line_no, content=line, timestamp=modified))

    logger.debug("Scanned %s: %d error line(s)", path, len(error_lines))
    return error_lines


def scan_outcome(
    path: str | Path,
    *,
    config: ScanConfig | None = None,
    clock: Clock = time.monotonic,
    on_warning: WarningSink | None = None,
) -> FileScanOutcome:
    """Scan one file and fold any ScanError into a FAILED outcome."""
    path = Path(path)
    large = False

    def _mark_large(_: Path, __: int) -> None:
        nonlocal large
        large = True

    try:
        entries = scan_file(
            path,
            config=config,
            clock=clock,
            on_warning=on_warning,
            on_large_file=_mark_large,
        )
    except ScanError as exc:
        return FileScanOutcome.failed(path, str(exc), large_file=large)
    return FileScanOutcome.matched(path, tuple(entries), large_file=large)
