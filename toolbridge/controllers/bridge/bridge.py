"""
MCP Stdio-to-HTTP Bridge Entry Point

Reads configuration from the environment, refuses to start without a
token, then serves the MCP stdio session until a termination signal or
end of input.

Exit codes: 0 on clean shutdown, 1 on missing configuration or a fatal error.
"""

import sys
from typing import Mapping, Optional, TextIO

from toolbridge.client import RemoteToolClient
from toolbridge.configs.logging import get_logger, setup_logging
from toolbridge.configs.settings import BridgeConfig, load_config
from toolbridge.controllers.bridge.adapter import ProtocolAdapter
from toolbridge.controllers.bridge.session import (
    ShutdownRequested,
    StdioSession,
    install_signal_handlers,
)
from toolbridge.exceptions import ConfigurationError, FatalStartupError

logger = get_logger("bridge")

EXIT_OK = 0
EXIT_FAILURE = 1


def main(
    environ: Optional[Mapping[str, str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    handle_signals: bool = True,
) -> int:
    """
    Run the bridge.

    Args:
        environ: Environment mapping. Defaults to os.environ.
        stdin: Protocol input stream. Defaults to sys.stdin.
        stdout: Protocol output stream. Defaults to sys.stdout.
        handle_signals: Install SIGINT/SIGTERM handlers.

    Returns:
        Process exit code
    """
    config = load_config(environ)
    setup_logging(debug=config.debug, log_file=config.log_file or "")
    logger.info(f"Starting MCP stdio bridge: {config.describe()}")

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        print("Usage: Set JWT_TOKEN in your MCP client config", file=sys.stderr)
        return EXIT_FAILURE

    try:
        _serve(config, stdin, stdout, handle_signals)
    except FatalStartupError as error:
        logger.exception(str(error))
        print(str(error), file=sys.stderr)
        return EXIT_FAILURE

    logger.info("MCP stdio bridge stopped")
    return EXIT_OK


def _serve(
    config: BridgeConfig,
    stdin: Optional[TextIO],
    stdout: Optional[TextIO],
    handle_signals: bool,
) -> None:
    """
    Build the client and session, then serve until shutdown.

    Raises:
        FatalStartupError: Anything uncaught during startup or serving,
            chained to its cause
    """
    client = None
    session = None
    try:
        client = RemoteToolClient(config.api_url, config.jwt_token, timeout=config.request_timeout)
        session = StdioSession(ProtocolAdapter(client), stdin, stdout)
        if handle_signals:
            install_signal_handlers(session)

        session.bind()
        logger.info("MCP stdio bridge started successfully")
        session.serve()
    except ShutdownRequested as e:
        logger.info(f"Shutdown requested before serving: {e}")
    except Exception as e:
        raise FatalStartupError(f"Fatal error: {e}") from e
    finally:
        if session is not None:
            session.close()
        if client is not None:
            client.close()


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
