"""Exception hierarchy for directory scans."""

from __future__ import annotations

from pathlib import Path


class ScanError(Exception):
    """Base exception for all scan errors."""

    label = "Scan error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class ScanIOError(ScanError):
    """Raised for generic filesystem failures."""

    label = "IO error"


class ScanNotFoundError(ScanIOError):
    """Raised when a path disappears before it can be scanned."""


class NoFilesProcessedError(ScanIOError):
    """Raised when a run ends without a single successfully scanned file."""


class ScanPermissionError(ScanError):
    """Raised when the OS denies access to a file or directory."""

    label = "Permission denied"


class InvalidInputError(ScanError):
    """Raised for unusable user input (bad root, unanswered prompts)."""

    label = "Invalid input"


class FileProcessingError(ScanError):
    """Wraps an unexpected failure together with the offending path."""

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(cause)
        self.path = path

    def __str__(self) -> str:
        return f"Error processing file {self.path}: {self.message}"


class FileSizeError(ScanError):
    """Raised when a file is larger than the configured ceiling."""

    label = "File size error"


class ScanTimeoutError(ScanError):
    """Raised when a single file takes longer than its time budget."""

    label = "Operation timed out"


class FileEncodingError(ScanError):
    """Raised when a file cannot be opened because of its encoding."""

    label = "Encoding error"
