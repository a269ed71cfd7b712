"""Plain Text Reporter Implementation."""

from compose_endpoints.actions.endpoint_table import format_endpoint_table
from compose_endpoints.actions.reporters.base import BaseReporter
from compose_endpoints.model.endpoints import EndpointMap


class PlainReporter(BaseReporter):
    """Prints the box-drawn endpoint table verbatim."""

    def report_endpoints(self, endpoints: EndpointMap, host: str, strategy: str | None = None) -> int:
        self.console.print(
            format_endpoint_table(endpoints),
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        return self.exit_code(endpoints)
