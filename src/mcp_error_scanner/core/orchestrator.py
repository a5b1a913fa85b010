"""Parallel fan-out of file scans with ordered aggregation."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

from .config import ScanConfig, default_scan_config, resolve_max_workers
from .errors import NoFilesProcessedError
from .models import (
    FileScanOutcome,
    ScanReport,
    ScanResult,
    ScanStatistics,
    ScanStatus,
    ScanWarning,
)
from .scanner import scan_outcome

logger = logging.getLogger(__name__)

ProgressHook = Callable[[int, int], None]
WarningSink = Callable[[ScanWarning], None]


class ProgressCounter:
    """Thread-safe completion counter; increment is the only mutation."""

    def __init__(self, total: int, on_progress: ProgressHook | None = None) -> None:
        self.total = total
        self._done = 0
        self._lock = threading.Lock()
        self._on_progress = on_progress

    @property
    def done(self) -> int:
        return self._done

    def increment(self) -> int:
        with self._lock:
            self._done += 1
            done = self._done
        if self._on_progress is not None:
            self._on_progress(done, self.total)
        return done


def _report_key(path: Path, root: Path | None) -> str:
    if root is None:
        return str(path)
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def aggregate(
    outcomes: Sequence[FileScanOutcome],
    *,
    root: Path | None = None,
    on_warning: WarningSink | None = None,
) -> tuple[ScanReport, ScanStatistics]:
    """Fold outcomes in the given order into a report and statistics."""
    report: ScanReport = {}
    stats = ScanStatistics(total_files=len(outcomes))

    for outcome in outcomes:
        if outcome.large_file:
            stats.large_files += 1

        if outcome.status is ScanStatus.FAILED:
            stats.skipped_files += 1
            message = outcome.error or "unknown failure"
            logger.warning("%s: %s", outcome.path, message)
            if on_warning is not None:
                on_warning(ScanWarning(path=outcome.path, message=message))
            continue

        stats.processed_files += 1
        if outcome.status is ScanStatus.MATCHED and outcome.entries:
            stats.total_errors += len(outcome.entries)
            report[_report_key(outcome.path, root)] = outcome.entries

    return report, stats


async def run_scan(
    files: Sequence[str | Path],
    *,
    root: str | Path | None = None,
    config: ScanConfig | None = None,
    on_progress: ProgressHook | None = None,
    on_warning: WarningSink | None = None,
) -> ScanResult:
    """Scan every file on a worker pool and aggregate in input order.

    Raises NoFilesProcessedError when not a single file could be scanned.
    """
    cfg = config or default_scan_config()
    paths = [Path(p) for p in files]
    root_path = Path(root) if root is not None else None
    progress = ProgressCounter(len(paths), on_progress)

    def _scan_one(path: Path) -> FileScanOutcome:
        try:
            return scan_outcome(path, config=cfg, on_warning=on_warning)
        finally:
            progress.increment()

    started = time.perf_counter()
    outcomes: list[FileScanOutcome] = []
    if paths:
        worker_count = min(resolve_max_workers(cfg.max_workers), len(paths))
        logger.info("Scanning %d file(s) with %d worker(s)", len(paths), worker_count)
        loop = asyncio.get_running_loop()
        executor = ThreadPoolExecutor(max_workers=worker_count)
        try:
            futures = [loop.run_in_executor(executor, partial(_scan_one, p)) for p in paths]
            outcomes = list(await asyncio.gather(*futures))
        finally:
            executor.shutdown(wait=True)
    duration = time.perf_counter() - started

    report, stats = aggregate(outcomes, root=root_path, on_warning=on_warning)
    if stats.processed_files == 0:
        raise NoFilesProcessedError("Could not process any files")

    logger.info(
        "Scan finished: %d processed, %d skipped, %d error line(s) in %.3fs",
        stats.processed_files,
        stats.skipped_files,
        stats.total_errors,
        duration,
    )
    return ScanResult(
        root=root_path,
        report=report,
        stats=stats,
        duration=duration,
        files=tuple(paths),
    )


def scan_files(files: Sequence[str | Path], **kwargs) -> ScanResult:
    """Synchronous wrapper around run_scan."""
    return asyncio.run(run_scan(files, **kwargs))
