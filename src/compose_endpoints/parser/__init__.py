"""Parser package - Converts raw command output into endpoint maps.

Parsers do NOT run commands - they structure data from scanners.
A malformed line or row is skipped, never aborting the whole parse.
"""

from compose_endpoints.parser.compose_file import ComposeFileParser
from compose_endpoints.parser.compose_json import ComposeJsonParser
from compose_endpoints.parser.docker_ps import DockerPsParser
from compose_endpoints.parser.listeners import ListenerDumpParser

__all__ = [
    "ComposeFileParser",
    "ComposeJsonParser",
    "DockerPsParser",
    "ListenerDumpParser",
]
