"""Compose File Parser.

Recovers statically configured host ports from a docker-compose.yml by
scanning it line by line. The file is never handed to a YAML loader: only
the short `"host:container"` port syntax is understood, and anything else
is ignored rather than rejected.

IMPORTANT DESIGN NOTES:
1. Indentation is assumed to use a two-space unit (Compose's own convention)
2. A service whose `ports:` block yields nothing is still recorded, with an
   empty list, so reports can flag it
3. The long syntax (`target:` / `published:` keys) is not recognised
"""

import re
from dataclasses import dataclass
from enum import Enum

from compose_endpoints.model.endpoints import EndpointMap, dedupe_urls, endpoint_url, parse_port

INDENT_UNIT = 2
SERVICE_INDENT = INDENT_UNIT
PROPERTY_INDENT = INDENT_UNIT * 2


class Section(str, Enum):
    """Where the scanner currently is in the file."""

    TOP_LEVEL = "top_level"
    IN_SERVICES = "in_services"
    IN_SERVICE = "in_service"
    IN_PORTS = "in_ports"


@dataclass(frozen=True)
class ParseState:
    """Scanner cursor. `service` is set exactly when inside a service block."""

    section: Section = Section.TOP_LEVEL
    service: str | None = None

    @classmethod
    def top_level(cls) -> "ParseState":
        return cls()

    @classmethod
    def services(cls) -> "ParseState":
        return cls(Section.IN_SERVICES)

    @classmethod
    def in_service(cls, service: str) -> "ParseState":
        return cls(Section.IN_SERVICE, service)

    @classmethod
    def in_ports(cls, service: str) -> "ParseState":
        return cls(Section.IN_PORTS, service)


class ComposeFileParser:
    """Line scanner for compose service definitions."""

    # One entry of a ports list, capturing the host port
    # Example: - "8080:80", - 3000:3000, - "127.0.0.1:8443:443/tcp"
    PORT_ITEM_RE = re.compile(
        r"""^(?:-\s*)?["']?"""
        r"""(?:(?:\d{1,3}(?:\.\d{1,3}){3}|\[[0-9A-Fa-f:]*\]):)?"""
        r"""(\d+):\d+(?:/(?:tcp|udp|sctp))?["']?\s*(?:#.*)?$"""
    )

    def parse(self, content: str, host: str) -> EndpointMap:
        """Parse compose file text into service URLs.

        Args:
            content: Full text of the compose file.
            host: Host name used to build the URLs.

        Returns:
            Map of service name to URLs, including empty lists for services
            whose ports block held no usable mapping.
        """
        collected: dict[str, list[str]] = {}
        state = ParseState.top_level()

        for raw_line in content.split("\n"):
            line = raw_line.rstrip()
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            indent = len(line) - len(line.lstrip(" "))
            is_list_item = stripped.startswith("-")
            is_key = stripped.endswith(":") and not is_list_item

            # New top-level key: only `services:` keeps us interested
            if indent == 0 and not is_list_item:
                state = ParseState.services() if stripped == "services:" else ParseState.top_level()
                continue

            if state.section == Section.TOP_LEVEL:
                continue

            # New service block
            if indent == SERVICE_INDENT and is_key:
                state = ParseState.in_service(stripped[:-1].strip().strip("\"'"))
                continue

            if state.service is None:
                continue

            if state.section == Section.IN_PORTS:
                if indent <= PROPERTY_INDENT and not is_list_item:
                    # A sibling property closed the ports list
                    state = ParseState.in_service(state.service)
                else:
                    match = self.PORT_ITEM_RE.match(stripped)
                    port = parse_port(match.group(1)) if match else None
                    if port is not None:
                        collected[state.service].append(endpoint_url(host, port))
                    continue

            if state.section == Section.IN_SERVICE and stripped == "ports:":
                state = ParseState.in_ports(state.service)
                collected.setdefault(state.service, [])

        return {name: dedupe_urls(urls) for name, urls in collected.items()}
