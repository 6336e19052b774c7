"""
Pytest fixtures for Tool Bridge tests.
"""

import io
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Generator

import pytest
import responses

# Add project root to path for toolbridge imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from toolbridge.client import RemoteToolClient  # noqa: E402
from toolbridge.controllers.bridge.adapter import ProtocolAdapter  # noqa: E402
from toolbridge.controllers.bridge.session import StdioSession  # noqa: E402

API_URL = "http://tools.test"
TOKEN = "test-token"


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Leave the toolbridge logger as we found it."""
    logger = logging.getLogger("toolbridge")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def restore_signal_handlers() -> Generator[None, None, None]:
    """Restore SIGINT/SIGTERM handlers installed by a test."""
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)


@pytest.fixture
def mocked_api() -> Generator[responses.RequestsMock, None, None]:
    """Intercept requests made through the `requests` library."""
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client() -> Generator[RemoteToolClient, None, None]:
    """Remote tool client pointed at the mocked API."""
    with RemoteToolClient(API_URL, TOKEN) as remote:
        yield remote


@pytest.fixture
def adapter(client: RemoteToolClient) -> ProtocolAdapter:
    return ProtocolAdapter(client)


def jsonrpc_lines(*messages: dict) -> io.StringIO:
    """Build an input stream with one JSON-RPC message per line."""
    return io.StringIO("".join(json.dumps(m) + "\n" for m in messages))


def read_responses(output: io.StringIO) -> list[dict]:
    """Parse every line written to an output stream."""
    return [json.loads(line) for line in output.getvalue().splitlines() if line]


@pytest.fixture
def make_session(adapter: ProtocolAdapter):
    """Factory for a session wired to in-memory streams."""

    def _make(*messages: dict) -> tuple[StdioSession, io.StringIO]:
        output = io.StringIO()
        session = StdioSession(adapter, jsonrpc_lines(*messages), output)
        return session, output

    return _make
