"""Docker PS Table Parser.

Parses `docker ps --format 'table {{.Names}}\\t{{.Ports}}'` output.

Example input:
    NAMES          PORTS
    myapp-web-1	0.0.0.0:8080->80/tcp, [::]:8080->80/tcp
    myapp-db-1	3306/tcp

Only published mappings (those with a `->` arrow) produce URLs; a container
exposing an internal port such as `3306/tcp` contributes nothing.
"""

import re

from compose_endpoints.model.endpoints import EndpointMap, dedupe_urls, endpoint_url, parse_port


class DockerPsParser:
    """Parser for the tab-delimited `docker ps` names/ports table."""

    PUBLISHED_MARKER = "->"

    # Host port of one mapping, any bind address
    # Example: 0.0.0.0:8080->80/tcp, [::]:8443->443/tcp, :::9000->9000/tcp
    PUBLISHED_PORT_RE = re.compile(r"[^\s,]*:(\d+)->")

    def parse(self, output: str, host: str) -> EndpointMap:
        """Parse the ps table into container URLs.

        Args:
            output: Captured stdout, header row first.
            host: Host name used to build the URLs.

        Returns:
            Map of container name to its published URLs.
        """
        collected: dict[str, list[str]] = {}
        rows = [line for line in output.split("\n") if line.strip()]

        for row in rows[1:]:  # Header is always present
            parts = row.split("\t", 1)
            if len(parts) < 2:
                continue
            name, ports_column = parts[0].strip(), parts[1].strip()
            if not name or self.PUBLISHED_MARKER not in ports_column:
                continue

            for match in self.PUBLISHED_PORT_RE.finditer(ports_column):
                port = parse_port(match.group(1))
                if port is not None:
                    collected.setdefault(name, []).append(endpoint_url(host, port))

        return {name: dedupe_urls(urls) for name, urls in collected.items()}
