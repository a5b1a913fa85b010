"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_error_scanner.core.classifier import (
    MAX_NON_ASCII_RATIO,
    MAX_NULL_RATIO,
    SNIFF_BYTES,
    TEXT_FILE_EXTENSIONS,
)
from mcp_error_scanner.core.config import resolve_scan_config
from mcp_error_scanner.tools.schemas import ScanResponse


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://error-scan/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://error-scan/help\n"
            "- app://error-scan/config/text-extensions\n"
            "- app://error-scan/config/limits\n"
            "- app://error-scan/schemas/scan-response\n"
            "\nTools: list_candidate_files(root), scan_directory(root, limit)\n"
        )

    @mcp.resource("app://error-scan/config/text-extensions")
    def text_extensions() -> dict[str, Any]:
        """Return the classifier allow-list and sniffing thresholds."""
        return {
            "extensions": sorted(TEXT_FILE_EXTENSIONS),
            "sniff_bytes": SNIFF_BYTES,
            "max_null_ratio": MAX_NULL_RATIO,
            "max_non_ascii_ratio": MAX_NON_ASCII_RATIO,
        }

    @mcp.resource("app://error-scan/config/limits")
    def limits() -> dict[str, Any]:
        """Return the effective per-file limits (env overrides applied)."""
        cfg = resolve_scan_config()
        return {
            "timeout_seconds": cfg.timeout_seconds,
            "max_file_size": cfg.max_file_size,
            "large_file_threshold": cfg.large_file_threshold,
            "read_buffer_size": cfg.read_buffer_size,
            "max_workers": cfg.max_workers,
        }

    @mcp.resource("app://error-scan/schemas/scan-response")
    def scan_response_schema() -> dict[str, Any]:
        """Return the JSON schema for scan_directory responses."""
        return ScanResponse.model_json_schema()
