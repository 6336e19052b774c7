"""
MCP Stdio Session

Owns the local protocol session: reads JSON-RPC messages from stdin one
line at a time, dispatches them through the ProtocolAdapter and writes
one response line per request to stdout.

Lifecycle: UNINITIALIZED -> SERVING -> SHUTTING_DOWN -> TERMINATED.
"""

import signal
import sys
from enum import Enum
from typing import Optional, TextIO

from toolbridge.configs.logging import get_logger
from toolbridge.controllers.bridge.adapter import ProtocolAdapter
from toolbridge.controllers.bridge.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    PARSE_ERROR,
    SERVER_ERROR,
    make_error,
    parse_message,
    write_message,
)
from toolbridge.exceptions import CatalogFetchError, ProtocolError, SessionStateError

logger = get_logger("session")


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    SERVING = "serving"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


ALLOWED_TRANSITIONS = {
    SessionState.UNINITIALIZED: {SessionState.SERVING, SessionState.SHUTTING_DOWN},
    SessionState.SERVING: {SessionState.SHUTTING_DOWN},
    SessionState.SHUTTING_DOWN: {SessionState.TERMINATED},
    SessionState.TERMINATED: set(),
}


class ShutdownRequested(Exception):
    """Raised from a signal handler to interrupt an idle read."""

    pass


class StdioSession:
    """
    Single local protocol session, one per process.

    Requests are handled strictly one at a time. A shutdown requested
    while a request is in flight takes effect once its response is
    written.
    """

    def __init__(
        self,
        adapter: ProtocolAdapter,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
    ):
        self.adapter = adapter
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self.state = SessionState.UNINITIALIZED
        self.busy = False

    def _transition(self, new_state: SessionState) -> None:
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise SessionStateError(
                f"Cannot move session from {self.state.value} to {new_state.value}"
            )
        logger.info(f"Session {self.state.value} -> {new_state.value}")
        self.state = new_state

    @property
    def serving(self) -> bool:
        return self.state is SessionState.SERVING

    def bind(self) -> None:
        """Attach to the stdio transport and start accepting requests."""
        self._transition(SessionState.SERVING)

    def serve(self) -> None:
        """Process input until end of stream or a shutdown request."""
        line = None
        try:
            for line in self._input:
                self.busy = True
                try:
                    self._answer(line)
                finally:
                    line = None
                    self.busy = False
                if not self.serving:
                    break
            else:
                self.request_shutdown("end of input")
        except ShutdownRequested as e:
            logger.info(f"Serve loop interrupted: {e}")
            # A line read just before the signal still gets its answer
            if line is not None:
                self._answer(line)

    def _answer(self, line: str) -> None:
        line = line.strip()
        if not line:
            return
        response = self.handle_line(line)
        if response is not None:
            write_message(self._output, response)

    def handle_line(self, line: str) -> Optional[dict]:
        """
        Turn one line of input into at most one response message.

        Every request with an id gets exactly one response: handler
        failures become JSON-RPC error responses here.
        """
        try:
            request = parse_message(line)
        except ValueError as e:
            logger.error(f"Invalid JSON: {e}")
            return make_error(None, PARSE_ERROR, f"Parse error: {e}")

        if not isinstance(request, dict):
            return make_error(None, INVALID_REQUEST, "Invalid request: expected an object")

        request_id = request.get("id")
        expects_response = "id" in request
        logger.debug(f"Received: {request.get('method')} (id={request_id})")

        if not self.serving:
            if not expects_response:
                return None
            return make_error(request_id, SERVER_ERROR, "Session is not serving")

        try:
            return self.adapter.dispatch(request)
        except ProtocolError as e:
            if not expects_response:
                return None
            return make_error(request_id, e.code, e.message)
        except CatalogFetchError as e:
            logger.error(f"ListTools failed: {e.message}")
            return make_error(request_id, SERVER_ERROR, e.message)
        except Exception as e:
            logger.exception(f"Server error handling {request.get('method')}")
            return make_error(request_id, INTERNAL_ERROR, f"Internal error: {e}")

    def request_shutdown(self, reason: str = "shutdown requested") -> bool:
        """
        Stop accepting requests. Idempotent.

        Returns:
            True if this call started the shutdown, False if one was
            already under way
        """
        if self.state in (SessionState.SHUTTING_DOWN, SessionState.TERMINATED):
            logger.debug(f"Shutdown already in progress, ignoring: {reason}")
            return False
        logger.info(f"Shutting down: {reason}")
        self._transition(SessionState.SHUTTING_DOWN)
        return True

    def close(self) -> None:
        """Close the session. Idempotent."""
        if self.state is SessionState.TERMINATED:
            return
        if self.state is not SessionState.SHUTTING_DOWN:
            self._transition(SessionState.SHUTTING_DOWN)
        self._output.flush()
        self._transition(SessionState.TERMINATED)


def install_signal_handlers(
    session: StdioSession,
    signals: tuple = (signal.SIGINT, signal.SIGTERM),
) -> None:
    """
    Route termination signals to the session's shutdown.

    An idle session (blocked reading input) is interrupted immediately;
    a busy one finishes its current request first.
    """

    def handle_signal(signum, frame):
        name = signal.Signals(signum).name
        logger.info(f"Received {name}")
        if session.request_shutdown(f"received {name}") and not session.busy:
            raise ShutdownRequested(name)

    for sig in signals:
        signal.signal(sig, handle_signal)
