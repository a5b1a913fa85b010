"""Module entrypoint.

Allows:
    python -m mcp_error_scanner
"""

from __future__ import annotations

from mcp_error_scanner.server.scan_server import main

if __name__ == "__main__":
    main()
