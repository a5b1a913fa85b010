"""Core data models for directory scans."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class ScanStatus(str, Enum):
    """Result kind of a single file scan."""

    MATCHED = "matched"
    CLEAN = "clean"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ErrorLine:
    """A line whose lowercase form contains "error"."""

    line_number: int
    content: str
    timestamp: datetime | None = None  # file mtime at scan start, not per line


@dataclass(frozen=True, slots=True)
class FileScanOutcome:
    """Outcome of scanning one candidate file (exactly one per file)."""

    path: Path
    status: ScanStatus
    entries: tuple[ErrorLine, ...] = ()
    error: str | None = None
    large_file: bool = False

    @classmethod
    def matched(cls, path: Path, entries: tuple[ErrorLine, ...], *, large_file: bool = False) -> FileScanOutcome:
        if not entries:
            return cls(path=path, status=ScanStatus.CLEAN, large_file=large_file)
        return cls(path=path, status=ScanStatus.MATCHED, entries=entries, large_file=large_file)

    @classmethod
    def failed(cls, path: Path, error: str, *, large_file: bool = False) -> FileScanOutcome:
        return cls(path=path, status=ScanStatus.FAILED, error=error, large_file=large_file)


@dataclass(slots=True)
class ScanStatistics:
    """Counters folded from per-file outcomes; only ever incremented."""

    total_files: int = 0
    processed_files: int = 0
    skipped_files: int = 0
    total_errors: int = 0
    large_files: int = 0


# Keyed by path relative to the scan root, in sorted input order.
ScanReport = dict[str, tuple[ErrorLine, ...]]


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Aggregated report and statistics for one run."""

    root: Path | None
    report: ScanReport
    stats: ScanStatistics
    duration: float = 0.0  # seconds spent scanning
    files: tuple[Path, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class ScanWarning:
    """Non-fatal problem surfaced while walking or scanning."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
