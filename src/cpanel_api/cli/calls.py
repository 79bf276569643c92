"""CLI: cpanel uapi|api2|api1"""

import json
from typing import Any, Awaitable, Callable

import click
from rich.console import Console

from cpanel_api.args import Args
from cpanel_api.client import AsyncCPanelAPI
from cpanel_api.errors import CPanelAPIError

console = Console()


def _get_client() -> AsyncCPanelAPI:
    from cpanel_api.cli.main import _get_client
    return _get_client()


def _run(coro):
    from cpanel_api.cli.main import _run
    return _run(coro)


def _parse_pairs(pairs: tuple[str, ...]) -> Args:
    args: Args = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="ARGS")
        args[key] = value
    return args


def _call(request: Callable[[AsyncCPanelAPI], Awaitable[Any]], json_output: bool) -> None:
    client = _get_client()

    async def _go() -> Any:
        try:
            return await request(client)
        finally:
            await client.close()

    try:
        result = _run(_go())
    except CPanelAPIError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    if json_output or not isinstance(result, str):
        click.echo(json.dumps(result, indent=2))
    else:
        click.echo(result)


@click.command("uapi")
@click.argument("module")
@click.argument("function")
@click.argument("args", nargs=-1)
@click.option("--json-output", "--json", is_flag=True)
def uapi_cmd(module, function, args, json_output):
    """Call a UAPI function, e.g. `cpanel uapi Email list_pops`."""
    call_args = _parse_pairs(args)
    _call(lambda client: client.uapi(module, function, call_args), json_output)


@click.command("api2")
@click.argument("module")
@click.argument("function")
@click.argument("args", nargs=-1)
@click.option("--json-output", "--json", is_flag=True)
def api2_cmd(module, function, args, json_output):
    """Call an API2 function."""
    call_args = _parse_pairs(args)
    _call(lambda client: client.api2(module, function, call_args), json_output)


@click.command("api1")
@click.argument("module")
@click.argument("function")
@click.argument("args", nargs=-1)
@click.option("--json-output", "--json", is_flag=True)
def api1_cmd(module, function, args, json_output):
    """Call an API1 function with positional arguments."""
    _call(lambda client: client.api1(module, function, list(args)), json_output)
