"""Endpoint Model - Data structures shared by every discovery strategy.

An endpoint map is a plain ``dict[str, list[str]]`` from container or
service name to the URLs it is reachable on. Every parser builds a fresh
map and hands it to the caller; nothing mutates it afterwards.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

EndpointMap = dict[str, list[str]]

# Key used when ports are known but the owning container is not
UNKNOWN_SERVICES_KEY = "unknown-services"

MIN_PORT = 1
MAX_PORT = 65535
MAX_PORT_DIGITS = len(str(MAX_PORT))


def is_valid_port(port: object) -> bool:
    """Check whether a value is a usable TCP/UDP port number."""
    if isinstance(port, bool) or not isinstance(port, int):
        return False
    return MIN_PORT <= port <= MAX_PORT


def parse_port(value: str) -> int | None:
    """Parse a decimal port string, returning None if it is not a valid port."""
    token = value.strip()
    if not token.isascii() or not token.isdigit():
        return None
    # Refuse oversized digit runs before int() sees them
    if len(token.lstrip("0")) > MAX_PORT_DIGITS:
        return None
    port = int(token.lstrip("0") or "0")
    return port if is_valid_port(port) else None


def endpoint_url(host: str, port: int) -> str:
    """Build the URL an operator would use to reach a published port."""
    return f"http://{host}:{port}"


def dedupe_urls(urls: Iterable[str]) -> list[str]:
    """Remove duplicate URLs, keeping first-seen order."""
    return list(dict.fromkeys(urls))


def _lookup(record: dict[str, Any], key: str) -> Any:
    """Case-insensitive key lookup.

    Docker has changed the casing of `compose ps` JSON fields between
    releases (``Name`` vs ``name``), so both are accepted.
    """
    if key in record:
        return record[key]
    lowered = key.lower()
    for candidate, value in record.items():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return value
    return None


@dataclass(frozen=True)
class PortPublisher:
    """A single container-to-host port mapping from `compose ps`."""

    target_port: int
    published_port: int
    protocol: str = "tcp"
    url: str = ""  # Bind address reported by compose, e.g. "0.0.0.0"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PortPublisher":
        return cls(
            target_port=_as_int(_lookup(data, "TargetPort")),
            published_port=_as_int(_lookup(data, "PublishedPort")),
            protocol=str(_lookup(data, "Protocol") or "tcp"),
            url=str(_lookup(data, "URL") or ""),
        )


@dataclass
class ComposeContainer:
    """The subset of a `docker compose ps --format json` record we read."""

    name: str
    service: str = ""
    project: str = ""
    state: str = ""
    publishers: list[PortPublisher] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComposeContainer":
        raw_publishers = _lookup(data, "Publishers")
        publishers = []
        if isinstance(raw_publishers, list):
            publishers = [PortPublisher.from_dict(p) for p in raw_publishers if isinstance(p, dict)]

        name = _lookup(data, "Name")
        return cls(
            name=name if isinstance(name, str) else "",
            service=str(_lookup(data, "Service") or ""),
            project=str(_lookup(data, "Project") or ""),
            state=str(_lookup(data, "State") or ""),
            publishers=publishers,
        )


def _as_int(value: Any) -> int:
    """Coerce a JSON port value to int; anything unusable becomes 0 (invalid)."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        token = value.strip()
        digits = token.removeprefix("-")
        if digits.isascii() and digits.isdigit() and len(digits.lstrip("0")) <= MAX_PORT_DIGITS:
            magnitude = int(digits.lstrip("0") or "0")
            return -magnitude if token.startswith("-") else magnitude
    return 0
