"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: list candidate files, scan a directory for error lines
- Resources: classifier allow-list, effective limits, response schema
- Prompts: a triage workflow built on the scan tools

Run locally (stdio):
    python -m mcp_error_scanner.server.scan_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_error_scanner.core.config import resolve_scan_config
from mcp_error_scanner.prompts.registry import register_prompts
from mcp_error_scanner.resources.registry import register_resources
from mcp_error_scanner.tools.scan import list_candidate_files_impl, scan_directory_impl

LOGGER = logging.getLogger(__name__)
LOG_LEVEL_ENV = "ERROR_SCAN_LOG_LEVEL"


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("error-scan", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
async def list_candidate_files(root: str) -> dict[str, Any]:
    """List the text files under a directory that a scan would read.

    Parameters
    ----------
    root:
        Directory to walk. Unreadable subdirectories are skipped and reported
        under "warnings".

    Returns
    -------
    dict:
        {"root": str, "count": int, "files": list[str], "warnings": list[str]}
    """
    return await list_candidate_files_impl(root=root)


@mcp.tool()
async def scan_directory(root: str, limit: int | None = None) -> dict[str, Any]:
    """Scan every text file under a directory for lines containing "error".

    Parameters
    ----------
    root:
        Directory to scan recursively.
    limit:
        Maximum number of error lines returned (hard-capped in the implementation).
        Statistics always cover every line found.

    Returns
    -------
    dict:
        {"root", "duration_ms", "statistics", "files", "truncated", "warnings"}
    """
    return await scan_directory_impl(root=root, limit=limit, config=resolve_scan_config())


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
