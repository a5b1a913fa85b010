"""Text vs. binary classification for scan candidates."""

from __future__ import annotations

import os
from pathlib import Path

TEXT_FILE_EXTENSIONS: frozenset[str] = frozenset(
    {
        "log", "txt", "text", "err", "out", "output", "debug",
        "conf", "config", "cfg", "ini", "properties",
        "yml", "yaml", "json", "xml", "env",
        "md", "rst", "info",
    }
)

SNIFF_BYTES = 512
MAX_NULL_RATIO = 0.01
MAX_NON_ASCII_RATIO = 0.30


def has_text_extension(path: str | Path) -> bool:
    suffix = Path(path).suffix
    return bool(suffix) and suffix[1:].lower() in TEXT_FILE_EXTENSIONS


def looks_like_text(sample: bytes) -> bool:
    """Byte heuristic: <1% NUL bytes and <30% bytes above 127."""
    if not sample:
        return False
    size = len(sample)
    nulls = sample.count(0)
    non_ascii = sum(1 for b in sample if b > 127)
    return nulls / size < MAX_NULL_RATIO and non_ascii / size < MAX_NON_ASCII_RATIO


def is_text_file(path: str | Path) -> bool:
    """Return True when the file is worth scanning line by line.

    Empty or unreadable files are never text. Known text extensions win
    without reading content; anything else is sniffed from its first bytes.
    Never raises.
    """
    p = Path(path)
    try:
        if os.stat(p).st_size == 0:
            return False
    except (OSError, ValueError):
        return False

    if has_text_extension(p):
        return True

    try:
        with p.open("rb") as f:
            sample = f.read(SNIFF_BYTES)
    except (OSError, ValueError):
        return False
    return looks_like_text(sample)
