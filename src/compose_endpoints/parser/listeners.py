"""Listener Dump Parser.

Parses the bare port list produced by piping `ss -tlnp` / `netstat -tlnp`
through `grep docker-proxy | awk | sed | sort -nu` on the remote host.
Container names are not available at this level, so every port is filed
under a single synthetic key.
"""

from compose_endpoints.model.endpoints import (
    UNKNOWN_SERVICES_KEY,
    EndpointMap,
    endpoint_url,
    parse_port,
)


class ListenerDumpParser:
    """Parser for a newline-separated list of listening ports."""

    def parse(self, output: str, host: str) -> EndpointMap:
        ports = {port for token in output.split("\n") if (port := parse_port(token)) is not None}
        if not ports:
            return {}
        return {UNKNOWN_SERVICES_KEY: [endpoint_url(host, port) for port in sorted(ports)]}
