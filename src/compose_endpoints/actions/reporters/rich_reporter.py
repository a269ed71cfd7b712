"""Rich Reporter Implementation."""

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from compose_endpoints.actions.endpoint_table import HINT, NO_PORTS_MESSAGE, NO_PORTS_TEXT, endpoint_rows
from compose_endpoints.actions.reporters.base import BaseReporter
from compose_endpoints.model.endpoints import UNKNOWN_SERVICES_KEY, EndpointMap

STRATEGY_LABELS = {
    "compose-json": "docker compose ps",
    "docker-ps": "docker ps",
    "compose-file": "compose file",
    "listeners": "docker-proxy listeners",
}


class RichReporter(BaseReporter):
    """Generates high-fidelity terminal output using Rich."""

    def report_endpoints(self, endpoints: EndpointMap, host: str, strategy: str | None = None) -> int:
        self.console.print()

        if not endpoints:
            self.console.print(f"[yellow]⚠️  {NO_PORTS_MESSAGE}[/] on [bold]{escape(host)}[/]")
            return self.exit_code(endpoints)

        source = STRATEGY_LABELS.get(strategy or "", strategy or "unknown")
        table = Table(title=f"📋 Service URLs on {escape(host)}", caption=f"source: {source}", title_justify="left")
        table.add_column("Service", style="bold cyan", no_wrap=True, max_width=35)
        table.add_column("URL")

        for name, urls in endpoint_rows(endpoints):
            if not urls:
                table.add_row(Text(name), Text(NO_PORTS_TEXT, style="yellow"))
                continue
            for index, url in enumerate(urls):
                cell = Text(f"✅ {url}" if index == 0 else f"   {url}", style=f"link {url}")
                table.add_row(Text(name if index == 0 else ""), cell)

        self.console.print(table)

        if UNKNOWN_SERVICES_KEY in endpoints:
            self.console.print("[dim]Container names unavailable; ports were read from host listeners.[/]")
        if any(endpoints.values()):
            self.console.print(HINT)

        return self.exit_code(endpoints)
