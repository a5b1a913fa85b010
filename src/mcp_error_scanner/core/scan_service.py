"""Directory scan entry point.

This module is the main integration point: it walks a root, sorts the
candidates and hands them to the orchestrator. The walk and the confirm
callback are blocking, so both run on the default executor.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from functools import partial
from pathlib import Path

from .config import ScanConfig, resolve_scan_config
from .errors import InvalidInputError
from .models import ScanResult, ScanWarning
from .orchestrator import ProgressHook, WarningSink, run_scan
from .walker import discover_files

logger = logging.getLogger(__name__)

Confirm = Callable[[Sequence[Path]], bool]


def validate_root(root: str | Path) -> Path:
    """Return root as a Path, or raise InvalidInputError if it is not a directory."""
    path = Path(root).expanduser()
    if not path.exists():
        raise InvalidInputError(f"Directory {path} does not exist")
    if not path.is_dir():
        raise InvalidInputError(f"Path {path} is not a directory")
    return path


async def discover_candidates(
    root: str | Path,
    *,
    on_warning: WarningSink | None = None,
) -> tuple[Path, list[Path]]:
    """Validate root and walk it off the event loop; return (root, sorted files)."""
    path = validate_root(root)
    loop = asyncio.get_running_loop()
    files = await loop.run_in_executor(None, partial(discover_files, path, on_warning=on_warning))
    return path, files


async def scan_root(
    root: str | Path,
    *,
    config: ScanConfig | None = None,
    on_warning: WarningSink | None = None,
    on_progress: ProgressHook | None = None,
) -> ScanResult:
    """Walk root and scan every candidate without asking for confirmation."""
    path, files = await discover_candidates(root, on_warning=on_warning)
    return await run_scan(
        files,
        root=path,
        config=config or resolve_scan_config(),
        on_progress=on_progress,
        on_warning=on_warning,
    )


async def scan_directory(
    root: str | Path,
    *,
    config: ScanConfig | None = None,
    on_warning: WarningSink | None = None,
    on_progress: ProgressHook | None = None,
    confirm: Confirm | None = None,
) -> ScanResult | None:
    """Walk root, optionally confirm the candidate list, then scan it.

    Returns None when confirm declines the scan.
    """
    if confirm is None:
        return await scan_root(root, config=config, on_warning=on_warning, on_progress=on_progress)

    path, files = await discover_candidates(root, on_warning=on_warning)
    loop = asyncio.get_running_loop()
    if not await loop.run_in_executor(None, confirm, files):
        logger.info("Scan of %s cancelled", path)
        return None

    return await run_scan(
        files,
        root=path,
        config=config or resolve_scan_config(),
        on_progress=on_progress,
        on_warning=on_warning,
    )


def collect_warnings() -> tuple[list[ScanWarning], WarningSink]:
    """Return a list and a sink that appends to it."""
    warnings: list[ScanWarning] = []
    return warnings, warnings.append
