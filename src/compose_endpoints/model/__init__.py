"""Model package - Core data structures for compose-endpoints."""

from compose_endpoints.model.endpoints import (
    MAX_PORT,
    MIN_PORT,
    UNKNOWN_SERVICES_KEY,
    ComposeContainer,
    EndpointMap,
    PortPublisher,
    dedupe_urls,
    endpoint_url,
    is_valid_port,
    parse_port,
)

__all__ = [
    "MAX_PORT",
    "MIN_PORT",
    "UNKNOWN_SERVICES_KEY",
    "ComposeContainer",
    "EndpointMap",
    "PortPublisher",
    "dedupe_urls",
    "endpoint_url",
    "is_valid_port",
    "parse_port",
]
