"""Scanner package - Data collection from remote servers.

Scanners run shell commands and collect raw data.
Parsing is delegated to the parser package.
"""

from compose_endpoints.scanner.ports import DiscoveryStrategy, PortDiscoveryScanner

__all__ = ["DiscoveryStrategy", "PortDiscoveryScanner"]
