"""Tests for CommandExecutor."""

import threading
from unittest.mock import MagicMock

from compose_endpoints.connector.executor import NOT_CONNECTED_ERROR, CommandExecutor
from compose_endpoints.connector.ssh import CommandCancelledError


def test_successful_command(mock_ssh_connector):
    mock_ssh_connector.execute.return_value = (0, "out\n", "")
    lines: list[str] = []

    result = CommandExecutor(log_fn=lines.append).run(mock_ssh_connector, "echo out")

    assert result.success
    assert result.exit_code == 0
    assert result.stdout == "out\n"
    assert result.command == "echo out"
    assert result.elapsed_seconds >= 0
    assert lines[0] == "Executing SSH command: echo out"
    assert "completed" in lines[1]
    assert len(lines) == 2


def test_nonzero_exit_logs_stderr(mock_ssh_connector):
    mock_ssh_connector.execute.return_value = (127, "", "docker: not found")
    lines: list[str] = []

    result = CommandExecutor(log_fn=lines.append).run(mock_ssh_connector, "docker ps")

    assert not result.success
    assert result.exit_code == 127
    assert result.stderr == "docker: not found"
    assert lines[-1] == "SSH error output: docker: not found"


def test_missing_session_never_executes():
    result = CommandExecutor(log_fn=lambda _: None).run(None, "docker ps")

    assert result.exit_code == -1
    assert result.stdout == ""
    assert result.stderr == NOT_CONNECTED_ERROR


def test_disconnected_session_never_executes(mock_ssh_connector):
    mock_ssh_connector.is_connected = False

    result = CommandExecutor(log_fn=lambda _: None).run(mock_ssh_connector, "docker ps")

    assert result.exit_code == -1
    mock_ssh_connector.execute.assert_not_called()


def test_exception_becomes_failed_result(mock_ssh_connector):
    mock_ssh_connector.execute.side_effect = OSError("Socket is closed")

    result = CommandExecutor(log_fn=lambda _: None).run(mock_ssh_connector, "docker ps")

    assert result.exit_code == -1
    assert result.stdout == ""
    assert result.stderr == "Socket is closed"


def test_cancellation_is_threaded_and_converted(mock_ssh_connector):
    cancel = threading.Event()
    mock_ssh_connector.execute.side_effect = CommandCancelledError("Cancelled while running: sleep 60")

    result = CommandExecutor(log_fn=lambda _: None).run(
        mock_ssh_connector, "sleep 60", cancel_event=cancel, timeout=5
    )

    assert result.exit_code == -1
    assert "Cancelled" in result.stderr
    mock_ssh_connector.execute.assert_called_once_with("sleep 60", timeout=5, cancel_event=cancel)


def test_default_log_sink_is_module_logger(mock_ssh_connector, caplog):
    with caplog.at_level("DEBUG", logger="compose_endpoints.connector.executor"):
        CommandExecutor().run(mock_ssh_connector, "uptime")

    assert "Executing SSH command: uptime" in caplog.text


def test_session_without_execute_support():
    session = MagicMock()
    session.is_connected = True
    session.execute.side_effect = RuntimeError("Not connected.")

    result = CommandExecutor(log_fn=lambda _: None).run(session, "true")

    assert result.exit_code == -1
    assert result.stderr == "Not connected."


class _DroppedSession:
    """A session whose transport vanished: even the connectivity check raises."""

    @property
    def is_connected(self):
        raise OSError("Transport is gone")

    def execute(self, command, *, timeout=None, cancel_event=None):
        raise AssertionError("execute should not be reached")


def test_failing_connectivity_check_becomes_failed_result():
    result = CommandExecutor(log_fn=lambda _: None).run(_DroppedSession(), "docker ps")

    assert result.exit_code == -1
    assert result.stdout == ""
    assert result.stderr == "Transport is gone"
