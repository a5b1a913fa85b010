"""Scan limits and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

MAX_FILE_SIZE = 1024 * 1024 * 1024  # 1 GiB
LARGE_FILE_THRESHOLD = 100_000_000
SCAN_TIMEOUT_SECONDS = 30.0
READ_BUFFER_SIZE = 128 * 1024

MAX_WORKERS_ENV = "ERROR_SCAN_MAX_WORKERS"
TIMEOUT_ENV = "ERROR_SCAN_TIMEOUT"


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Per-file limits and worker pool sizing."""

    timeout_seconds: float = SCAN_TIMEOUT_SECONDS
    max_file_size: int = MAX_FILE_SIZE
    large_file_threshold: int = LARGE_FILE_THRESHOLD
    read_buffer_size: int = READ_BUFFER_SIZE
    max_workers: int | None = None


def default_scan_config() -> ScanConfig:
    """Fixed defaults (30 s per file, 1 GiB ceiling, 100 MB large-file mark)."""
    return ScanConfig()


def resolve_max_workers(max_workers: int | None) -> int:
    if max_workers is not None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        return max_workers

    cpu_count = os.cpu_count() or 1
    return min(32, cpu_count)


def resolve_scan_config(cfg: ScanConfig | None = None) -> ScanConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = default_scan_config()

    env = os.getenv(MAX_WORKERS_ENV)
    if env:
        try:
            workers = int(env)
        except ValueError as exc:
            raise ValueError(f"{MAX_WORKERS_ENV} must be an integer") from exc
        if workers < 1:
            raise ValueError(f"{MAX_WORKERS_ENV} must be >= 1")
        cfg = replace(cfg, max_workers=workers)

    env = os.getenv(TIMEOUT_ENV)
    if env:
        try:
            timeout = float(env)
        except ValueError as exc:
            raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds") from exc
        if timeout <= 0:
            raise ValueError(f"{TIMEOUT_ENV} must be > 0")
        cfg = replace(cfg, timeout_seconds=timeout)

    return cfg
