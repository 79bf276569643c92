"""
cPanel API CLI: `cpanel` command.

Commands:
  cpanel config set|show|clear   Saved connection settings
  cpanel uapi MODULE FUNC [k=v]  UAPI call
  cpanel api2 MODULE FUNC [k=v]  API2 call
  cpanel api1 MODULE FUNC [arg]  API1 call
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install cpanel-api[cli]")

from cpanel_api.client import AsyncCPanelAPI
from cpanel_api.transport.http import DEFAULT_PORT

console = Console()
CONFIG_FILE = Path.home() / ".cpanel" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.touch(mode=0o600)
    CONFIG_FILE.chmod(0o600)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncCPanelAPI:
    cfg = _load_config()
    if not cfg.get("host") or not cfg.get("user") or not cfg.get("token"):
        console.print("[red]Not configured. Run `cpanel config set` first.[/red]")
        raise SystemExit(1)
    return AsyncCPanelAPI.connect(
        cfg["host"],
        cfg["user"],
        cfg["token"],
        port=cfg.get("port", DEFAULT_PORT),
        verify=cfg.get("verify", True),
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr")
def main(verbose: bool):
    """cPanel API CLI: UAPI, API2 and API1 behind one interface."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.group()
def config():
    """Connection settings."""


@config.command("set")
@click.option("--host", prompt=True)
@click.option("--user", prompt=True)
@click.option("--token", prompt=True, hide_input=True)
@click.option("--port", default=DEFAULT_PORT, type=int, show_default=True)
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
def config_set(host: str, user: str, token: str, port: int, insecure: bool):
    """Save host, user and API token."""
    _save_config({"host": host, "user": user, "token": token, "port": port, "verify": not insecure})
    console.print(f"[green]Saved settings for {user}@{host}:{port}[/green]")
    console.print("[dim]Written to ~/.cpanel/config.json[/dim]")


@config.command("show")
def config_show():
    """Show saved settings (token hidden)."""
    cfg = _load_config()
    if not cfg:
        console.print("[yellow]Not configured. Run `cpanel config set`.[/yellow]")
        return
    token: Optional[str] = cfg.get("token")
    cfg["token"] = "****" if token else None
    click.echo(json.dumps(cfg, indent=2))


@config.command("clear")
def config_clear():
    """Forget saved settings."""
    _save_config({})
    console.print("[green]Settings cleared.[/green]")


# Register subcommands from separate modules
from cpanel_api.cli.calls import uapi_cmd, api2_cmd, api1_cmd

main.add_command(uapi_cmd)
main.add_command(api2_cmd)
main.add_command(api1_cmd)


if __name__ == "__main__":
    main()
