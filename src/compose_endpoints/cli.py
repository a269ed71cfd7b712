"""
Click-based CLI for compose-endpoints.

IMPORTANT: This module only ORCHESTRATES. It never parses or decides.
- Loads server profiles
- Opens the SSH session
- Runs the discovery cascade
- Formats output
"""

import contextlib
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Iterator

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from compose_endpoints import __version__
from compose_endpoints.actions.reporters import REPORTERS
from compose_endpoints.config import ConfigManager, DiscoverySettings
from compose_endpoints.connector.ssh import SSHConfig, SSHConnector
from compose_endpoints.scanner.ports import PortDiscoveryScanner

console = Console()
err_console = Console(stderr=True)

EXIT_CONNECTION_FAILED = 2
EXIT_CANCELLED = 130


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="compose-endpoints")
@click.option("--config", "-c", type=click.Path(), help="Path to config directory")
@click.option("--verbose", "-v", is_flag=True, help="Log every remote command")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """📋 compose-endpoints: find the URLs a remote compose deployment exposes."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    config_dir = Path(config) if config else None
    ctx.obj["config_mgr"] = ConfigManager(config_dir)


def _resolve_config(ctx: click.Context, server: str) -> SSHConfig:
    """Resolve server string to SSHConfig (profile name or IP)."""
    config_mgr = ctx.obj["config_mgr"]
    cfg = config_mgr.get_profile(server)
    if cfg:
        return cfg

    # Otherwise treat as hostname/IP with default root user
    return SSHConfig(host=server, user="root")


@contextlib.contextmanager
def _cancel_on_interrupt(cancel_event: threading.Event) -> Iterator[None]:
    """Turn Ctrl-C into a cancel event instead of a KeyboardInterrupt."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum: int, frame: object) -> None:
        cancel_event.set()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


@main.command()
@click.argument("server")
@click.option("--path", "-p", "working_directory", default=".", show_default=True, help="Remote compose project directory")
@click.option("--host", "public_host", default=None, help="Host name to use in URLs (default: SSH host)")
@click.option("--format", "fmt", type=click.Choice(sorted(REPORTERS)), default="plain", show_default=True, help="Output format")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="Per-command timeout in seconds")
@click.pass_context
def discover(
    ctx: click.Context,
    server: str,
    working_directory: str,
    public_host: str | None,
    fmt: str,
    timeout: float | None,
) -> None:
    """Discover published container ports on SERVER."""
    cfg = _resolve_config(ctx, server)
    settings = DiscoverySettings() if timeout is None else DiscoverySettings(command_timeout=timeout)
    reporter = REPORTERS[fmt](console)
    cancel_event = threading.Event()

    try:
        with SSHConnector(cfg) as ssh:
            scanner = PortDiscoveryScanner(ssh, settings=settings)
            with _cancel_on_interrupt(cancel_event):
                endpoints = scanner.discover(working_directory, host=public_host, cancel_event=cancel_event)
    except ConnectionError as e:
        err_console.print(f"[bold red]❌ Connection failed:[/] {escape(str(e))}")
        sys.exit(EXIT_CONNECTION_FAILED)

    if cancel_event.is_set():
        err_console.print("[yellow]Discovery cancelled.[/]")
        sys.exit(EXIT_CANCELLED)

    exit_code = reporter.report_endpoints(endpoints, public_host or cfg.host, scanner.last_strategy)
    sys.exit(exit_code)


@main.group()
def profile() -> None:
    """Manage server connection profiles."""
    pass


@profile.command("add")
@click.argument("name")
@click.option("--host", "-h", required=True, help="Server hostname or IP")
@click.option("--user", "-u", default="root", help="SSH username")
@click.option("--port", "-p", default=22, help="SSH port")
@click.option("--password", "-pass", help="SSH password")
@click.option("--key", "-k", type=click.Path(), help="Path to SSH private key")
@click.pass_context
def profile_add(
    ctx: click.Context, name: str, host: str, user: str, port: int, password: str | None, key: str | None
) -> None:
    """Add a new server profile."""
    config_mgr = ctx.obj["config_mgr"]
    cfg = SSHConfig(host=host, user=user, port=port, password=password, key_path=key)
    config_mgr.add_profile(name, cfg)
    console.print(f"[bold green]✓ Added server profile:[/] {escape(name)}")


@profile.command("list")
@click.pass_context
def profile_list(ctx: click.Context) -> None:
    """List all server profiles."""
    config_mgr = ctx.obj["config_mgr"]
    profiles = config_mgr.list_profiles()
    if not profiles:
        console.print("[dim]No profiles configured yet.[/]")
        return

    for name, data in profiles.items():
        target = f"{data.get('user', 'root')}@{data.get('host', '?')}:{data.get('port', 22)}"
        console.print(f"[bold green]{escape(name)}[/]: {escape(target)}")


@profile.command("remove")
@click.argument("name")
@click.pass_context
def profile_remove(ctx: click.Context, name: str) -> None:
    """Remove a server profile."""
    config_mgr = ctx.obj["config_mgr"]
    if config_mgr.remove_profile(name):
        console.print(f"[bold green]✓ Removed profile:[/] {escape(name)}")
    else:
        err_console.print(f"[bold red]Error:[/] Profile {escape(name)} not found.")
        sys.exit(1)


if __name__ == "__main__":
    main()
