"""Compose JSON Parser.

Parses the output of `docker compose ps --format json` into an endpoint map.

Compose v2 prints one JSON object per line; releases before 2.21 print a
single JSON array instead. Both shapes are accepted. A line that fails to
decode is skipped, never aborting the rest of the parse.

Example input line:
    {"Name":"myapp-web-1","Service":"web","Publishers":[
        {"URL":"0.0.0.0","TargetPort":80,"PublishedPort":8080,"Protocol":"tcp"}]}
"""

import json
import logging
from typing import Any

from compose_endpoints.model.endpoints import (
    ComposeContainer,
    EndpointMap,
    dedupe_urls,
    endpoint_url,
    is_valid_port,
)

logger = logging.getLogger(__name__)


class ComposeJsonParser:
    """Parser for `docker compose ps --format json` output."""

    def parse(self, output: str, host: str) -> EndpointMap:
        """Parse compose JSON records into service URLs.

        Args:
            output: Captured stdout of the ps command.
            host: Host name used to build the URLs.

        Returns:
            Map of container name to its published URLs.
        """
        collected: dict[str, list[str]] = {}

        for line_num, line in enumerate(output.split("\n"), start=1):
            if not line.strip():
                continue
            try:
                decoded = json.loads(line)
            except (ValueError, RecursionError) as e:
                # JSONDecodeError, oversized number literals and runaway nesting
                logger.debug("Skipping invalid JSON on line %d: %s", line_num, e)
                continue

            for record in self._records(decoded):
                container = ComposeContainer.from_dict(record)
                if not container.name:
                    continue
                urls = [
                    endpoint_url(host, p.published_port)
                    for p in container.publishers
                    if is_valid_port(p.published_port)
                ]
                if urls:
                    collected.setdefault(container.name, []).extend(urls)

        return {name: dedupe_urls(urls) for name, urls in collected.items()}

    @staticmethod
    def _records(decoded: Any) -> list[dict[str, Any]]:
        if isinstance(decoded, dict):
            return [decoded]
        if isinstance(decoded, list):
            return [item for item in decoded if isinstance(item, dict)]
        return []
