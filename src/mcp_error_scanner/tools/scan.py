"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from mcp_error_scanner.core.config import ScanConfig
from mcp_error_scanner.core.models import ScanResult
from mcp_error_scanner.core.scan_service import collect_warnings, discover_candidates, scan_root

from .schemas import ErrorLineModel, FileErrors, ScanResponse, StatisticsModel

DEFAULT_LIMIT = 500
HARD_LIMIT = 5000


def _resolve_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return min(limit, HARD_LIMIT)


def build_response(result: ScanResult, *, limit: int, warnings: list[str]) -> ScanResponse:
    """Convert a ScanResult into the tool response, capping returned lines."""
    files: list[FileErrors] = []
    remaining = limit
    truncated = False

    for name, entries in result.report.items():
        kept = entries[:remaining] if remaining > 0 else ()
        if len(kept) < len(entries):
            truncated = True
        remaining -= len(kept)
        files.append(
            FileErrors(
                file=name,
                error_count=len(entries),
                lines=[ErrorLineModel.from_entry(e) for e in kept],
            )
        )

    return ScanResponse(
        root=str(result.root) if result.root is not None else "",
        duration_ms=int(result.duration * 1000),
        statistics=StatisticsModel.from_stats(result.stats),
        files=files,
        truncated=truncated,
        warnings=warnings,
    )


async def list_candidate_files_impl(*, root: str) -> dict[str, Any]:
    """Implementation for the `list_candidate_files` MCP tool."""
    warnings, sink = collect_warnings()
    path, files = await discover_candidates(root, on_warning=sink)
    return {
        "root": str(path),
        "count": len(files),
        "files": [str(f.relative_to(path)) for f in files],
        "warnings": [str(w) for w in warnings],
    }


async def scan_directory_impl(
    *,
    root: str,
    limit: int | None = None,
    config: ScanConfig | None = None,
) -> dict[str, Any]:
    """Implementation for the `scan_directory` MCP tool.

    Notes
    -----
    - Fails when root is not a directory or when no file could be scanned.
    - Per-file failures are listed under "warnings" and counted as skipped.
    """
    resolved_limit = _resolve_limit(limit)
    warnings, sink = collect_warnings()
    result = await scan_root(root, config=config, on_warning=sink)

    response = build_response(
        result,
        limit=resolved_limit,
        warnings=[str(w) for w in warnings],
    )
    return response.model_dump(mode="json")
