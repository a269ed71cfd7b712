"""Reporters for endpoint maps (plain text, rich terminal, JSON)."""

from compose_endpoints.actions.reporters.base import BaseReporter
from compose_endpoints.actions.reporters.json_reporter import JsonReporter
from compose_endpoints.actions.reporters.plain_reporter import PlainReporter
from compose_endpoints.actions.reporters.rich_reporter import RichReporter

REPORTERS: dict[str, type[BaseReporter]] = {
    "plain": PlainReporter,
    "rich": RichReporter,
    "json": JsonReporter,
}

__all__ = ["BaseReporter", "JsonReporter", "PlainReporter", "REPORTERS", "RichReporter"]
