from __future__ import annotations

import threading
from collections.abc import Sequence
from pathlib import Path

import pytest

from mcp_error_scanner.core import scan_service
from mcp_error_scanner.core.config import ScanConfig
from mcp_error_scanner.core.errors import InvalidInputError, NoFilesProcessedError
from mcp_error_scanner.core.models import ScanWarning
from mcp_error_scanner.core.scan_service import (
    discover_candidates,
    scan_directory,
    scan_root,
    validate_root,
)
from mcp_error_scanner.core.walker import discover_files


@pytest.mark.asyncio
async def test_end_to_end_log_binary_and_empty(tmp_path: Path) -> None:
    (tmp_path / "a.log").write_text("ok\nERROR: disk full\n", encoding="utf-8")
    (tmp_path / "b.bin").write_bytes(b"\x00\x01\x02\xff" * 64)
    (tmp_path / "c.txt").touch()

    assert discover_files(tmp_path) == [tmp_path / "a.log"]

    result = await scan_directory(tmp_path)

    assert result is not None
    assert list(result.report) == ["a.log"]
    [entry] = result.report["a.log"]
    assert entry.line_number == 2
    assert entry.content == "ERROR: disk full"
    assert result.stats.total_files == 1
    assert result.stats.processed_files == 1
    assert result.stats.total_errors == 1
    assert result.stats.skipped_files == 0


@pytest.mark.asyncio
async def test_directory_without_text_files_is_fatal(tmp_path: Path) -> None:
    (tmp_path / "blob").write_bytes(b"\x00" * 100)
    with pytest.raises(NoFilesProcessedError):
        await scan_directory(tmp_path)


@pytest.mark.asyncio
async def test_oversized_file_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "small.log").write_text("ERROR small\n", encoding="utf-8")
    (tmp_path / "huge.log").write_text("ERROR " * 100 + "\n", encoding="utf-8")
    warnings: list[ScanWarning] = []

    result = await scan_directory(
        tmp_path,
        config=ScanConfig(max_file_size=64),
        on_warning=warnings.append,
    )

    assert result is not None
    assert list(result.report) == ["small.log"]
    assert result.stats.skipped_files == 1
    assert result.stats.processed_files == 1
    assert [w.path.name for w in warnings] == ["huge.log"]
    assert warnings[0].message.startswith("File size error")


@pytest.mark.asyncio
async def test_confirm_sees_sorted_candidates_and_can_cancel(tmp_path: Path) -> None:
    (tmp_path / "b.log").write_text("ERROR b\n", encoding="utf-8")
    (tmp_path / "a.log").write_text("ERROR a\n", encoding="utf-8")
    seen: list[Sequence[Path]] = []

    def _decline(files: Sequence[Path]) -> bool:
        seen.append(list(files))
        return False

    assert await scan_directory(tmp_path, confirm=_decline) is None
    assert seen == [[tmp_path / "a.log", tmp_path / "b.log"]]


@pytest.mark.asyncio
async def test_walk_and_confirm_run_off_the_event_loop(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "a.log").write_text("ERROR a\n", encoding="utf-8")
    loop_thread = threading.get_ident()
    threads: dict[str, int] = {}
    real_discover = scan_service.discover_files

    def _discover(root, **kwargs):
        threads["walk"] = threading.get_ident()
        return real_discover(root, **kwargs)

    def _confirm(files: Sequence[Path]) -> bool:
        threads["confirm"] = threading.get_ident()
        return True

    monkeypatch.setattr(scan_service, "discover_files", _discover)

    result = await scan_directory(tmp_path, confirm=_confirm)

    assert result is not None
    assert list(result.report) == ["a.log"]
    assert threads["walk"] != loop_thread
    assert threads["confirm"] != loop_thread


@pytest.mark.asyncio
async def test_discover_candidates_expands_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    logs = tmp_path / "logs"
    logs.mkdir()
    (logs / "b.log").write_text("ok\n", encoding="utf-8")
    (logs / "a.log").write_text("ok\n", encoding="utf-8")
    monkeypatch.setenv("HOME", str(tmp_path))

    root, files = await discover_candidates("~/logs")

    assert root == logs
    assert files == [logs / "a.log", logs / "b.log"]


@pytest.mark.asyncio
async def test_scan_root_scans_without_confirmation(tmp_path: Path) -> None:
    (tmp_path / "a.log").write_text("ERROR a\nfine\n", encoding="utf-8")

    result = await scan_root(tmp_path)

    assert result.root == tmp_path
    assert list(result.report) == ["a.log"]
    assert result.stats.total_errors == 1


@pytest.mark.asyncio
async def test_report_uses_paths_relative_to_root(tmp_path: Path) -> None:
    nested = tmp_path / "svc" / "api"
    nested.mkdir(parents=True)
    (nested / "app.log").write_text("fatal error\n", encoding="utf-8")

    result = await scan_directory(tmp_path, confirm=lambda files: True)

    assert result is not None
    assert list(result.report) == [str(Path("svc") / "api" / "app.log")]


def test_validate_root_rejects_missing_and_files(tmp_path: Path) -> None:
    with pytest.raises(InvalidInputError, match="does not exist"):
        validate_root(tmp_path / "missing")

    path = tmp_path / "a.log"
    path.write_text("x\n", encoding="utf-8")
    with pytest.raises(InvalidInputError, match="not a directory"):
        validate_root(path)

    assert validate_root(tmp_path) == tmp_path
