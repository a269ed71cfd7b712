"""Port Discovery Scanner - Finds the URLs a compose deployment exposes.

Tries four strategies in fixed order and returns the first non-empty map:

1. `docker compose ps --format json` (falls back to `docker-compose`)
2. `docker ps` names/ports table
3. The compose file itself (static `ports:` declarations)
4. docker-proxy listeners from `ss` / `netstat`

Each later strategy is lower fidelity than the one before; the last one
cannot even tell which container owns a port. A strategy whose command
fails is treated as having found nothing.
"""

import logging
import shlex
import threading
from dataclasses import dataclass
from typing import Callable

from compose_endpoints.config import DiscoverySettings
from compose_endpoints.connector.executor import CommandExecutor, RemoteSession
from compose_endpoints.model.endpoints import EndpointMap
from compose_endpoints.parser.compose_file import ComposeFileParser
from compose_endpoints.parser.compose_json import ComposeJsonParser
from compose_endpoints.parser.docker_ps import DockerPsParser
from compose_endpoints.parser.listeners import ListenerDumpParser

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"

# Names and ports, tab separated; `\t` is expanded by docker, not the shell
DOCKER_PS_FORMAT = "'table {{.Names}}\\t{{.Ports}}'"

LISTENER_PIPELINE = "grep docker-proxy | awk '{print $4}' | sed 's/.*://' | sort -nu"


@dataclass(frozen=True)
class DiscoveryStrategy:
    """One remote command plus the parser that understands its output."""

    name: str
    command: str
    parse: Callable[[str, str], EndpointMap]


class PortDiscoveryScanner:
    """Scanner for published container ports on a compose host."""

    def __init__(
        self,
        ssh: RemoteSession | None,
        executor: CommandExecutor | None = None,
        settings: DiscoverySettings | None = None,
    ) -> None:
        self.ssh = ssh
        self.executor = executor or CommandExecutor()
        self.settings = settings or DiscoverySettings()
        self.last_strategy: str | None = None

    def discover(
        self,
        working_directory: str,
        host: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> EndpointMap:
        """Run the cascade from `working_directory`.

        Args:
            working_directory: Remote directory holding the compose project.
            host: Host name for the URLs. Defaults to the SSH host.
            cancel_event: Threaded through to every remote call.

        Returns:
            The first non-empty endpoint map, or {} if nothing was found.
        """
        self.last_strategy = None
        if not self._session_connected():
            logger.debug("No connected session; skipping port discovery")
            return {}

        url_host = host or self._session_host()

        for strategy in self.strategies(working_directory):
            result = self.executor.run(
                self.ssh,
                strategy.command,
                cancel_event=cancel_event,
                timeout=self.settings.command_timeout,
            )
            if not result.success or not result.stdout.strip():
                logger.debug("Strategy %s produced no output", strategy.name)
                continue

            try:
                endpoints = strategy.parse(result.stdout, url_host)
            except Exception:
                logger.warning("Strategy %s could not parse its output", strategy.name, exc_info=True)
                continue

            if endpoints:
                logger.info("Discovered %d service(s) via %s", len(endpoints), strategy.name)
                self.last_strategy = strategy.name
                return endpoints

            logger.debug("Strategy %s found no published ports", strategy.name)

        return {}

    def strategies(self, working_directory: str) -> list[DiscoveryStrategy]:
        """Build the ordered strategy list for one project directory."""
        cd = f"cd {_quote_remote_path(working_directory)} &&"

        compose_ps = " || ".join(f"{binary} ps --format json" for binary in self.settings.compose_binaries)
        read_file = " || ".join(
            f"cat {shlex.quote(name)} 2>/dev/null" for name in self.settings.compose_files
        )
        listeners = f"(ss -tlnp 2>/dev/null || netstat -tlnp 2>/dev/null) | {LISTENER_PIPELINE}"

        return [
            DiscoveryStrategy("compose-json", f"{cd} ({compose_ps}) 2>/dev/null", ComposeJsonParser().parse),
            DiscoveryStrategy("docker-ps", f"{cd} docker ps --format {DOCKER_PS_FORMAT} --no-trunc", DockerPsParser().parse),
            DiscoveryStrategy("compose-file", f"{cd} ({read_file})", ComposeFileParser().parse),
            DiscoveryStrategy("listeners", f"{cd} {listeners}", ListenerDumpParser().parse),
        ]

    def _session_connected(self) -> bool:
        if self.ssh is None:
            return False
        try:
            return bool(self.ssh.is_connected)
        except Exception as e:
            logger.debug("Session connectivity check failed: %s", e)
            return False

    def _session_host(self) -> str:
        config = getattr(self.ssh, "config", None)
        return getattr(config, "host", None) or DEFAULT_HOST


def _quote_remote_path(path: str) -> str:
    """Shell-quote a path while letting the remote shell expand a leading ~."""
    if path == "~":
        return path
    if path.startswith("~/"):
        return "~/" + shlex.quote(path[2:])
    return shlex.quote(path)
