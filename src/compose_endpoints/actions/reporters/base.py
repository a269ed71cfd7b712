"""Base Reporter Interface."""

from abc import ABC, abstractmethod

from rich.console import Console

from compose_endpoints.model.endpoints import EndpointMap


class BaseReporter(ABC):
    """Abstract base class for all endpoint reporters."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def report_endpoints(self, endpoints: EndpointMap, host: str, strategy: str | None = None) -> int:
        """Report discovered endpoints to the console.

        Returns:
            Exit code: 0 if at least one URL was found, 1 otherwise.
        """
        pass

    @staticmethod
    def exit_code(endpoints: EndpointMap) -> int:
        return 0 if any(endpoints.values()) else 1
