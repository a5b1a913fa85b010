"""Directory error-scan core.

Walks a root for text files, scans each one for lines mentioning "error"
and folds the per-file outcomes into a single report.
"""

from __future__ import annotations

from .classifier import is_text_file
from .config import ScanConfig, default_scan_config, resolve_scan_config
from .errors import ScanError
from .models import ErrorLine, FileScanOutcome, ScanResult, ScanStatistics, ScanStatus, ScanWarning
from .orchestrator import run_scan, scan_files
from .scan_service import scan_directory
from .scanner import scan_file, scan_outcome
from .walker import collect_files, discover_files

__all__ = [
    "ErrorLine",
    "FileScanOutcome",
    "ScanConfig",
    "ScanError",
    "ScanResult",
    "ScanStatistics",
    "ScanStatus",
    "ScanWarning",
    "collect_files",
    "default_scan_config",
    "discover_files",
    "is_text_file",
    "resolve_scan_config",
    "run_scan",
    "scan_directory",
    "scan_file",
    "scan_files",
    "scan_outcome",
]
