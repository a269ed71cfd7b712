"""Command Executor - Runs one discovery command and never raises.

Every remote round trip made by the discovery cascade goes through
CommandExecutor.run(), which turns any failure (no session, SSH error,
timeout, cancellation) into a CommandResult with exit_code -1.
"""

import logging
import threading
import time
from typing import Callable, Protocol

from compose_endpoints.connector.ssh import CommandResult

logger = logging.getLogger(__name__)

NOT_CONNECTED_ERROR = "SSH connection not established"


class RemoteSession(Protocol):
    """What the executor needs from a connected session."""

    @property
    def is_connected(self) -> bool: ...

    def execute(
        self,
        command: str,
        *,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> tuple[int, str, str]: ...


class CommandExecutor:
    """Runs commands against an already-connected session.

    Args:
        log_fn: Sink for diagnostic lines. Defaults to this module's logger at DEBUG.
    """

    def __init__(self, log_fn: Callable[[str], None] | None = None) -> None:
        self._log = log_fn or logger.debug

    def run(
        self,
        session: RemoteSession | None,
        command: str,
        cancel_event: threading.Event | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Execute a command, capturing every failure as exit_code -1."""
        self._log(f"Executing SSH command: {command}")
        started = time.monotonic()

        try:
            if session is None or not session.is_connected:
                self._log(f"SSH command skipped: {NOT_CONNECTED_ERROR}")
                return CommandResult(
                    command=command,
                    stdout="",
                    stderr=NOT_CONNECTED_ERROR,
                    exit_code=-1,
                    elapsed_seconds=time.monotonic() - started,
                )
            exit_code, stdout, stderr = session.execute(
                command, timeout=timeout, cancel_event=cancel_event
            )
        except Exception as e:
            elapsed = time.monotonic() - started
            self._log(f"SSH command failed in {elapsed:.1f}s: {e}")
            return CommandResult(
                command=command,
                stdout="",
                stderr=str(e) or type(e).__name__,
                exit_code=-1,
                elapsed_seconds=elapsed,
            )

        elapsed = time.monotonic() - started
        self._log(f"SSH command completed in {elapsed:.1f}s, exit code: {exit_code}")
        if exit_code != 0:
            self._log(f"SSH error output: {stderr}")

        return CommandResult(
            command=command,
            stdout=stdout or "",
            stderr=stderr or "",
            exit_code=exit_code,
            elapsed_seconds=elapsed,
        )
