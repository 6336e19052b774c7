"""
MCP Stdio-to-HTTP Bridge

Reads MCP JSON-RPC messages from stdin, forwards tool requests to the
remote HTTP tool API, and writes responses to stdout.
"""

from toolbridge.controllers.bridge.bridge import main, run

__all__ = ["main", "run"]
