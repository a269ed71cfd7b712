"""Configuration management for compose-endpoints server profiles."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import keyring
import yaml
from keyring.errors import KeyringError

from compose_endpoints.connector.ssh import SSHConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "COMPOSE_ENDPOINTS_CONFIG"
KEYRING_SERVICE = "compose-endpoints"
# Stored in place of a password that lives in the keyring
KEYRING_MARKER = "__keyring__"


@dataclass(frozen=True)
class DiscoverySettings:
    """Tunables for the port discovery cascade."""

    command_timeout: float = 30
    compose_files: tuple[str, ...] = (
        "docker-compose.yml",
        "docker-compose.yaml",
        "compose.yml",
        "compose.yaml",
    )
    compose_binaries: tuple[str, ...] = ("docker compose", "docker-compose")


def default_config_dir() -> Path:
    """~/.compose-endpoints, unless COMPOSE_ENDPOINTS_CONFIG points elsewhere."""
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return Path.home() / ".compose-endpoints"


class ConfigManager:
    """Server profiles in a YAML file, with passwords kept in the system keyring.

    Hosts without a keyring backend get the password written into the
    profile itself, with a warning.
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        self.config_dir = config_dir or default_config_dir()
        self.profiles_file = self.config_dir / "profiles.yaml"
        self.service_id = KEYRING_SERVICE

        self.config_dir.mkdir(parents=True, exist_ok=True)
        if not self.profiles_file.exists():
            self._write({})

    def _read(self) -> dict[str, Any]:
        try:
            data = yaml.safe_load(self.profiles_file.read_text())
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read %s: %s", self.profiles_file, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, profiles: dict[str, Any]) -> None:
        self.profiles_file.touch(mode=0o600)
        self.profiles_file.write_text(yaml.safe_dump(profiles))

    def _stash_password(self, name: str, password: str | None) -> str | None:
        if not password:
            return None
        try:
            keyring.set_password(self.service_id, name, password)
        except KeyringError as e:
            logger.warning("Keyring unavailable, storing password in profile: %s", e)
            return password
        return KEYRING_MARKER

    def _reveal_password(self, name: str, stored: str | None) -> str | None:
        if stored != KEYRING_MARKER:
            return stored
        try:
            return keyring.get_password(self.service_id, name)
        except KeyringError as e:
            logger.warning("Could not read password for %s from keyring: %s", name, e)
            return None

    def add_profile(self, name: str, config: SSHConfig) -> None:
        """Add or replace a profile."""
        profiles = self._read()
        profiles[name] = {
            "host": config.host,
            "user": config.user,
            "port": config.port,
            "key_path": config.key_path,
            "password": self._stash_password(name, config.password),
        }
        self._write(profiles)

    def get_profile(self, name: str) -> SSHConfig | None:
        """Look a profile up by name; None if missing or it names no host."""
        entry = self._read().get(name)
        if not isinstance(entry, dict) or not entry.get("host"):
            return None

        return SSHConfig(
            host=str(entry["host"]),
            user=entry.get("user") or "root",
            port=entry.get("port") or 22,
            key_path=entry.get("key_path"),
            password=self._reveal_password(name, entry.get("password")),
        )

    def list_profiles(self) -> dict[str, dict[str, Any]]:
        """All profiles that are mappings; anything else in the file is ignored."""
        return {name: entry for name, entry in self._read().items() if isinstance(entry, dict)}

    def remove_profile(self, name: str) -> bool:
        profiles = self._read()
        if name not in profiles:
            return False

        entry = profiles.pop(name)
        if isinstance(entry, dict) and entry.get("password") == KEYRING_MARKER:
            try:
                keyring.delete_password(self.service_id, name)
            except KeyringError as e:
                logger.warning("Could not remove keyring entry for %s: %s", name, e)

        self._write(profiles)
        return True
