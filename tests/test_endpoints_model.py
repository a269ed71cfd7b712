"""Tests for endpoint model helpers."""

import pytest

from compose_endpoints.model.endpoints import (
    ComposeContainer,
    PortPublisher,
    dedupe_urls,
    endpoint_url,
    is_valid_port,
    parse_port,
)


@pytest.mark.parametrize("port", [1, 80, 65535])
def test_valid_ports(port):
    assert is_valid_port(port)


@pytest.mark.parametrize("port", [0, -1, 65536, 70000, True, "80", None, 80.0])
def test_invalid_ports(port):
    assert not is_valid_port(port)


@pytest.mark.parametrize("text,expected", [
    ("8080", 8080),
    (" 443\n", 443),
    ("0", None),
    ("-1", None),
    ("65536", None),
    ("80a", None),
    ("", None),
    ("٣٣", None),  # non-ASCII digits
    ("0008080", 8080),
    ("0" * 5000, None),
    ("9" * 5000, None),
])
def test_parse_port(text, expected):
    assert parse_port(text) == expected


def test_endpoint_url():
    assert endpoint_url("host", 8080) == "http://host:8080"


def test_dedupe_keeps_first_seen_order():
    assert dedupe_urls(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_compose_container_from_record():
    container = ComposeContainer.from_dict({
        "Name": "myapp-web-1",
        "Service": "web",
        "Project": "myapp",
        "State": "running",
        "Publishers": [
            {"URL": "0.0.0.0", "TargetPort": 80, "PublishedPort": 8080, "Protocol": "tcp"},
            "garbage",
        ],
    })

    assert container.name == "myapp-web-1"
    assert container.service == "web"
    assert container.project == "myapp"
    assert container.publishers == [PortPublisher(target_port=80, published_port=8080, protocol="tcp", url="0.0.0.0")]


def test_publisher_tolerates_odd_port_values():
    assert PortPublisher.from_dict({"PublishedPort": "8080"}).published_port == 8080
    assert PortPublisher.from_dict({"PublishedPort": None}).published_port == 0
    assert PortPublisher.from_dict({"PublishedPort": True}).published_port == 0
    assert PortPublisher.from_dict({"PublishedPort": "9" * 5000}).published_port == 0
    assert PortPublisher.from_dict({}).protocol == "tcp"


def test_non_string_name_is_treated_as_missing():
    assert ComposeContainer.from_dict({"Name": 42}).name == ""
