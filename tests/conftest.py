"""Pytest configuration and fixtures for compose-endpoints tests."""

import pytest
from unittest.mock import MagicMock

from compose_endpoints.connector.ssh import SSHConfig, SSHConnector


@pytest.fixture
def mock_ssh_connector():
    """Create a connected mock SSH connector for testing."""
    connector = MagicMock(spec=SSHConnector)
    connector.config = SSHConfig(host="host")
    connector.is_connected = True

    # Default behavior: commands succeed with no output
    connector.execute.return_value = (0, "", "")

    return connector


@pytest.fixture
def sample_compose_json_output():
    """Sample `docker compose ps --format json` output (one object per line)."""
    return (
        '{"ID":"abc123","Name":"myapp-web-1","Command":"docker-entrypoint.sh","Project":"myapp",'
        '"Service":"web","State":"running","Health":"","ExitCode":0,"Publishers":['
        '{"URL":"0.0.0.0","TargetPort":80,"PublishedPort":8080,"Protocol":"tcp"},'
        '{"URL":"::","TargetPort":80,"PublishedPort":8080,"Protocol":"tcp"},'
        '{"URL":"0.0.0.0","TargetPort":443,"PublishedPort":8443,"Protocol":"tcp"}]}\n'
        '{"ID":"def456","Name":"myapp-db-1","Project":"myapp","Service":"db","State":"running",'
        '"Publishers":[{"URL":"","TargetPort":5432,"PublishedPort":0,"Protocol":"tcp"}]}\n'
    )


@pytest.fixture
def sample_docker_ps_output():
    """Sample `docker ps --format 'table {{.Names}}\\t{{.Ports}}'` output."""
    return (
        "NAMES\tPORTS\n"
        "myapp-web-1\t0.0.0.0:8080->80/tcp, [::]:8080->80/tcp, 0.0.0.0:8443->443/tcp\n"
        "myapp-db-1\t3306/tcp\n"
    )


@pytest.fixture
def sample_compose_file():
    """Sample docker-compose.yml with a mix of port syntaxes."""
    return '''version: "3.8"

services:
  web:
    image: nginx:alpine
    ports:
      - "8080:80"
      - "8443:443"
    environment:
      - PORT=9000:9000
  api:
    build: ./api
    ports:
      - 3000:3000
      - "127.0.0.1:9229:9229"
  db:
    image: postgres:16
    expose:
      - "5432"

volumes:
  data:
'''
