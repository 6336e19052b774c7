"""
Tool Bridge - an MCP stdio front end for HTTP tool-provider APIs.

Exposes the tools of a remote HTTP API to MCP clients that only speak
the stdio transport.
"""

__version__ = "2.1.3"
