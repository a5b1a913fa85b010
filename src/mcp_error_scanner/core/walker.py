"""Failure-tolerant recursive discovery of text files."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .classifier import is_text_file
from .errors import ScanIOError, ScanPermissionError
from .models import ScanWarning

logger = logging.getLogger(__name__)

WarningSink = Callable[[ScanWarning], None]


def _emit(on_warning: WarningSink | None, path: Path, message: str) -> None:
    logger.warning("%s: %s", path, message)
    if on_warning is not None:
        on_warning(ScanWarning(path=path, message=message))


def _describe(exc: OSError) -> str:
    if isinstance(exc, PermissionError):
        return "Permission denied"
    return exc.strerror or str(exc)


def _list_dir(path: Path) -> list[os.DirEntry[str]]:
    with os.scandir(path) as it:
        return list(it)


def _dir_key(path: Path) -> tuple[int, int] | None:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return st.st_dev, st.st_ino


def collect_files(root: str | Path, *, on_warning: WarningSink | None = None) -> list[Path]:
    """Return every text file under root (unordered).

    Only a failure to list root itself is fatal. Unreadable subdirectories and
    broken entries are reported through on_warning and skipped.
    """
    root = Path(root)
    try:
        entries = _list_dir(root)
    except PermissionError as exc:
        raise ScanPermissionError(f"Cannot access directory {root}: Permission denied") from exc
    except OSError as exc:
        raise ScanIOError(f"Cannot list directory {root}: {_describe(exc)}") from exc

    files: list[Path] = []
    seen: set[tuple[int, int]] = set()
    root_key = _dir_key(root)
    if root_key is not None:
        seen.add(root_key)

    pending: list[tuple[Path, list[os.DirEntry[str]]]] = [(root, entries)]
    while pending:
        dir_path, dir_entries = pending.pop()
        for entry in dir_entries:
            path = Path(entry.path)
            try:
                is_file = entry.is_file()
                is_dir = not is_file and entry.is_dir()
            except OSError as exc:
                _emit(on_warning, dir_path, f"Skipping entry {entry.name}: {_describe(exc)}")
                continue

            if is_file:
                if is_text_file(path):
                    files.append(path)
                else:
                    logger.debug("Skipping non-text file: %s", path)
                continue

            if not is_dir:
                continue

            key = _dir_key(path)
            if key is not None:
                if key in seen:
                    logger.debug("Skipping already visited directory: %s", path)
                    continue
                seen.add(key)

            try:
                sub_entries = _list_dir(path)
            except PermissionError:
                _emit(on_warning, path, "Skipping directory: Permission denied")
                continue
            except OSError as exc:
                _emit(on_warning, path, f"Error accessing directory: {_describe(exc)}")
                continue
            pending.append((path, sub_entries))

    return files


def discover_files(root: str | Path, *, on_warning: WarningSink | None = None) -> list[Path]:
    """Walk root and return candidate files sorted by path string."""
    files = collect_files(root, on_warning=on_warning)
    files.sort(key=str)
    logger.info("Found %d candidate file(s) under %s", len(files), root)
    return files
