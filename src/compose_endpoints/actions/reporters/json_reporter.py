"""JSON Reporter Implementation."""

import json

from compose_endpoints.actions.reporters.base import BaseReporter
from compose_endpoints.model.endpoints import EndpointMap


class JsonReporter(BaseReporter):
    """Generates machine-readable JSON output."""

    def report_endpoints(self, endpoints: EndpointMap, host: str, strategy: str | None = None) -> int:
        data = {
            "host": host,
            "strategy": strategy,
            "services": {name: sorted(set(urls)) for name, urls in sorted(endpoints.items())},
        }
        self.console.print(json.dumps(data, indent=2), markup=False, highlight=False, soft_wrap=True)
        return self.exit_code(endpoints)
