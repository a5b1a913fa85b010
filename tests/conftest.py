from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            "\n".join(
                [
                    "2025-12-30T08:12:01Z [INFO] service started",
                    "2025-12-30T08:12:03Z [WARNING] retrying request id=abc123",
                    "2025-12-30T08:12:04Z [ERROR] upstream timeout route=/api/v1/items",
                    "2025-12-30T08:12:05Z [CRITICAL] database error: unavailable",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, list[bytes]], None]:
    def _write(path: Path, lines: list[bytes]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"".join(line + b"\n" for line in lines))

    return _write


@pytest.fixture
def binary_blob() -> bytes:
    # Enough NUL bytes to fail the sniffing heuristic.
    return bytes(range(256)) * 2
