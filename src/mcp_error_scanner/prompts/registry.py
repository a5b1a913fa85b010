"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def triage_scan_results(root: str = "/var/log", limit: int = 500) -> list[dict[str, Any]]:
        """Build a prompt that triages the error lines found under a directory."""
        return [
            {
                "role": "system",
                "content": (
                    "You are a senior incident triage assistant. "
                    "Provide concise, evidence-based summaries from scan results. "
                    "Do not invent details; if the evidence is insufficient, say so."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Triage the directory using scan_directory. Follow this workflow:\n"
                    "- Optionally call list_candidate_files first to see what will be scanned.\n"
                    "- Call scan_directory with the parameters below.\n"
                    "- If truncated is true, say that only part of the lines were returned.\n"
                    "- Mention skipped files and the warnings that explain them.\n"
                    "- Use only tool output for evidence; do not fabricate lines.\n\n"
                    "Call scan_directory with:\n"
                    f"- root: {root}\n"
                    f"- limit: {limit}\n\n"
                    "Return this structure:\n"
                    "1) Files with the most errors (up to 5, with counts)\n"
                    "2) Evidence (2-5 quoted lines as [file:line] content)\n"
                    "3) Suspected root causes (say 'Unknown' if unclear)\n"
                    "4) Next actions (2-4 bullets)\n"
                ),
            },
        ]
