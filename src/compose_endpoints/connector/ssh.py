"""SSH Connector - Secure connection to remote servers.

This module handles all SSH communication with remote servers.
It only ever runs read-only discovery commands and supports
cooperative cancellation of a command that is still running.
"""

import threading
import time
from dataclasses import dataclass
from pathlib import Path

import paramiko
from paramiko.ssh_exception import AuthenticationException, SSHException

# How often a running command is polled for completion or cancellation
POLL_INTERVAL = 0.1
RECV_CHUNK = 32768


class CommandCancelledError(RuntimeError):
    """Raised when a cancel event fires while waiting for a remote command."""


@dataclass
class SSHConfig:
    """SSH connection configuration."""

    host: str
    user: str = "root"
    port: int = 22
    key_path: str | None = None
    password: str | None = None  # Fallback, prefer keys
    timeout: int = 30


@dataclass(frozen=True)
class CommandResult:
    """Result of a command execution.

    A command that could not be executed at all has exit_code -1,
    an empty stdout and the reason in stderr.
    """

    command: str
    stdout: str
    stderr: str
    exit_code: int
    elapsed_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class SSHConnector:
    """SSH connection manager for remote server operations.

    Example:
        >>> config = SSHConfig(host="192.168.1.100", user="deploy")
        >>> with SSHConnector(config) as ssh:
        ...     exit_code, stdout, stderr = ssh.execute("docker compose ps")
    """

    def __init__(self, config: SSHConfig) -> None:
        """Initialize SSH connector with configuration."""
        self.config = config
        self._client: paramiko.SSHClient | None = None

    @property
    def is_connected(self) -> bool:
        """Whether the underlying transport is up."""
        if self._client is None:
            return False
        transport = self._client.get_transport()
        return transport is not None and transport.is_active()

    def connect(self) -> None:
        """Establish SSH connection."""
        self._client = paramiko.SSHClient()
        self._client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        connect_kwargs: dict = {
            "hostname": self.config.host,
            "port": self.config.port,
            "username": self.config.user,
            "timeout": self.config.timeout,
        }

        # Prefer key-based authentication
        if self.config.key_path:
            key_path = Path(self.config.key_path).expanduser()
            if key_path.exists():
                connect_kwargs["key_filename"] = str(key_path)
        elif self.config.password:
            connect_kwargs["password"] = self.config.password

        try:
            self._client.connect(**connect_kwargs)
        except AuthenticationException as e:
            self._client = None
            raise ConnectionError(f"Authentication failed: {e}") from e
        except (SSHException, OSError) as e:
            self._client = None
            raise ConnectionError(f"SSH error: {e}") from e

    def disconnect(self) -> None:
        """Close SSH connection."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "SSHConnector":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.disconnect()

    def execute(
        self,
        command: str,
        *,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> tuple[int, str, str]:
        """Execute a command on the remote server.

        Args:
            command: The shell command to execute.
            timeout: Seconds to wait for completion. Defaults to config timeout.
            cancel_event: When set, the wait is abandoned and the channel closed.

        Returns:
            Tuple of (exit_code, stdout, stderr).

        Raises:
            RuntimeError: If not connected.
            CommandCancelledError: If cancel_event was set before completion.
            TimeoutError: If the command did not finish within the timeout.
        """
        if not self._client:
            raise RuntimeError("Not connected. Use 'with SSHConnector(config):' context.")
        if cancel_event is not None and cancel_event.is_set():
            raise CommandCancelledError(f"Cancelled before dispatch: {command}")

        cmd_timeout = timeout if timeout is not None else self.config.timeout
        deadline = time.monotonic() + cmd_timeout
        waiter = cancel_event or threading.Event()

        _stdin, stdout, stderr = self._client.exec_command(command, timeout=cmd_timeout)
        channel = stdout.channel
        out_chunks: list[bytes] = []
        err_chunks: list[bytes] = []

        # Drain while waiting so a chatty command never blocks on a full window
        while not channel.exit_status_ready():
            while channel.recv_ready():
                out_chunks.append(channel.recv(RECV_CHUNK))
            while channel.recv_stderr_ready():
                err_chunks.append(channel.recv_stderr(RECV_CHUNK))

            if waiter.wait(POLL_INTERVAL):
                channel.close()
                raise CommandCancelledError(f"Cancelled while running: {command}")
            if time.monotonic() > deadline:
                channel.close()
                raise TimeoutError(f"Command timed out after {cmd_timeout}s: {command}")

        exit_code = channel.recv_exit_status()
        out_chunks.append(stdout.read())
        err_chunks.append(stderr.read())

        return (
            exit_code,
            b"".join(out_chunks).decode("utf-8", errors="replace"),
            b"".join(err_chunks).decode("utf-8", errors="replace"),
        )
