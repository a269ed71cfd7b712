"""Tests for endpoint reporters."""

import io
import json

from rich.console import Console

from compose_endpoints.actions.endpoint_table import format_endpoint_table
from compose_endpoints.actions.reporters import REPORTERS, JsonReporter, PlainReporter, RichReporter


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, force_terminal=False, color_system=None), buffer


ENDPOINTS = {
    "myapp-web-1": ["http://host:8443", "http://host:8080"],
    "myapp-db-1": ["http://host:3306"],
}


def test_plain_reporter_prints_table_verbatim():
    console, buffer = _console()

    exit_code = PlainReporter(console).report_endpoints(ENDPOINTS, "host", "compose-json")

    assert exit_code == 0
    assert buffer.getvalue() == format_endpoint_table(ENDPOINTS) + "\n"


def test_plain_reporter_empty_map():
    console, buffer = _console()

    exit_code = PlainReporter(console).report_endpoints({}, "host")

    assert exit_code == 1
    assert buffer.getvalue().strip() == "No exposed ports detected"


def test_json_reporter_structure():
    console, buffer = _console()

    exit_code = JsonReporter(console).report_endpoints(ENDPOINTS, "host", "docker-ps")

    assert exit_code == 0
    data = json.loads(buffer.getvalue())
    assert data == {
        "host": "host",
        "strategy": "docker-ps",
        "services": {
            "myapp-db-1": ["http://host:3306"],
            "myapp-web-1": ["http://host:8080", "http://host:8443"],
        },
    }


def test_json_reporter_only_empty_services_exits_nonzero():
    console, buffer = _console()

    exit_code = JsonReporter(console).report_endpoints({"worker": []}, "host", "compose-file")

    assert exit_code == 1
    assert json.loads(buffer.getvalue())["services"] == {"worker": []}


def test_rich_reporter_renders_rows():
    console, buffer = _console()

    exit_code = RichReporter(console).report_endpoints(ENDPOINTS, "host", "compose-json")

    output = buffer.getvalue()
    assert exit_code == 0
    assert "web-1" in output
    assert "db-1" in output
    assert "http://host:8080" in output
    assert "docker compose ps" in output
    assert "Click or copy URLs" in output


def test_rich_reporter_flags_synthetic_key():
    console, buffer = _console()

    RichReporter(console).report_endpoints({"unknown-services": ["http://h:80"]}, "h", "listeners")

    assert "Container names unavailable" in buffer.getvalue()


def test_rich_reporter_empty_map():
    console, buffer = _console()

    exit_code = RichReporter(console).report_endpoints({}, "host")

    assert exit_code == 1
    assert "No exposed ports detected" in buffer.getvalue()


def test_registry_names():
    assert set(REPORTERS) == {"plain", "rich", "json"}
