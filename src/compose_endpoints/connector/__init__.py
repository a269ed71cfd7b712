"""Connector package - Remote command execution over SSH."""

from compose_endpoints.connector.executor import CommandExecutor
from compose_endpoints.connector.ssh import (
    CommandCancelledError,
    CommandResult,
    SSHConfig,
    SSHConnector,
)

__all__ = [
    "CommandCancelledError",
    "CommandExecutor",
    "CommandResult",
    "SSHConfig",
    "SSHConnector",
]
