"""
Tests for the bridge entry point: configuration, startup and exit codes.
"""

import io
import signal
from unittest.mock import patch

import pytest
import responses

from conftest import API_URL, TOKEN, jsonrpc_lines, read_responses
from test_session import SignallingInput
from toolbridge.configs import load_config
from toolbridge.controllers.bridge import main
from toolbridge.controllers.bridge.bridge import _serve
from toolbridge.exceptions import FatalStartupError

ENV = {"API_URL": API_URL, "JWT_TOKEN": TOKEN}


class TestStartup:
    """Tests for startup refusal and fatal errors."""

    def test_missing_token_exits_1_without_session(self, capsys):
        with patch("toolbridge.controllers.bridge.bridge.StdioSession") as session_cls:
            exit_code = main(environ={"API_URL": API_URL}, stdin=io.StringIO(), stdout=io.StringIO())

        assert exit_code == 1
        session_cls.assert_not_called()
        assert "JWT_TOKEN" in capsys.readouterr().err

    def test_blank_token_is_missing(self):
        with patch("toolbridge.controllers.bridge.bridge.StdioSession") as session_cls:
            exit_code = main(environ={"JWT_TOKEN": "   "}, stdin=io.StringIO(), stdout=io.StringIO())

        assert exit_code == 1
        session_cls.assert_not_called()

    def test_fatal_startup_error_exits_1(self, capsys):
        with patch(
            "toolbridge.controllers.bridge.bridge.RemoteToolClient",
            side_effect=RuntimeError("cannot build client"),
        ):
            exit_code = main(environ=ENV, stdin=io.StringIO(), stdout=io.StringIO(), handle_signals=False)

        assert exit_code == 1
        assert "Fatal error: cannot build client" in capsys.readouterr().err

    def test_fatal_error_wraps_its_cause(self):
        cause = RuntimeError("cannot build client")
        with patch("toolbridge.controllers.bridge.bridge.RemoteToolClient", side_effect=cause):
            with pytest.raises(FatalStartupError) as exc_info:
                _serve(load_config(ENV), io.StringIO(), io.StringIO(), handle_signals=False)

        assert exc_info.value.message == "Fatal error: cannot build client"
        assert exc_info.value.__cause__ is cause

    def test_fatal_error_is_logged_with_cause(self, tmp_path):
        log_file = tmp_path / "bridge.log"
        with patch(
            "toolbridge.controllers.bridge.bridge.RemoteToolClient",
            side_effect=RuntimeError("cannot build client"),
        ):
            main(environ={**ENV, "LOG_FILE": str(log_file)}, stdin=io.StringIO(), stdout=io.StringIO(), handle_signals=False)

        text = log_file.read_text()
        assert "ERROR [toolbridge.bridge] Fatal error: cannot build client" in text
        assert "FatalStartupError" in text
        assert "RuntimeError: cannot build client" in text


class TestServing:
    """Tests for a full bridge run over in-memory streams."""

    def test_serves_until_end_of_input(self, mocked_api):
        mocked_api.add(responses.GET, f"{API_URL}/tools", json={"tools": [{"name": "echo"}]})
        stdout = io.StringIO()

        exit_code = main(
            environ=ENV,
            stdin=jsonrpc_lines({"jsonrpc": "2.0", "id": 1, "method": "tools/list"}),
            stdout=stdout,
            handle_signals=False,
        )

        assert exit_code == 0
        (response,) = read_responses(stdout)
        assert response["result"]["tools"] == [
            {"name": "echo", "description": "", "inputSchema": {"type": "object", "properties": {}}}
        ]

    def test_sigterm_while_idle_exits_0(self, restore_signal_handlers):
        stdout = io.StringIO()

        exit_code = main(environ=ENV, stdin=SignallingInput("", signal.SIGTERM), stdout=stdout)

        assert exit_code == 0
        assert stdout.getvalue() == ""

    def test_sigint_while_idle_exits_0(self, restore_signal_handlers):
        exit_code = main(environ=ENV, stdin=SignallingInput("", signal.SIGINT), stdout=io.StringIO())

        assert exit_code == 0


class TestLogging:
    """Tests for optional file logging."""

    def test_log_file_records_events_without_token(self, tmp_path, mocked_api):
        mocked_api.add(responses.POST, f"{API_URL}/tools/echo", status=404, json={})
        log_file = tmp_path / "logs" / "bridge.log"

        main(
            environ={**ENV, "LOG_FILE": str(log_file)},
            stdin=jsonrpc_lines({"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": {"name": "echo"}}),
            stdout=io.StringIO(),
            handle_signals=False,
        )

        text = log_file.read_text()
        assert "Starting MCP stdio bridge" in text
        assert "Executing tool: echo" in text
        assert "Tool execution failed" in text
        assert "Session serving -> shutting_down" in text
        assert TOKEN not in text

    def test_no_log_file_writes_nothing(self, tmp_path, mocked_api, monkeypatch):
        monkeypatch.chdir(tmp_path)

        main(environ=ENV, stdin=io.StringIO(), stdout=io.StringIO(), handle_signals=False)

        assert list(tmp_path.iterdir()) == []
