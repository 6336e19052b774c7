#!/usr/bin/env python3
"""
MCP Stdio-to-HTTP Bridge

Reads MCP JSON-RPC messages from stdin, forwards tool requests to the
remote tool API configured by API_URL/JWT_TOKEN, and writes responses
to stdout.
"""

import sys

from toolbridge.controllers.bridge import main

if __name__ == "__main__":
    sys.exit(main())
