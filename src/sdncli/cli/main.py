"""
sdncli CLI: `sdncli` command.

Commands:
  sdncli token                      Print a fresh auth token
  sdncli cache                      Dump the API object cache
  sdncli request <uri>              Raw request to any API path
  sdncli <cmd> create|update|...    Resource operations, one <cmd> per
                                    [[resource]] entry in config.toml
"""

import asyncio
import logging
from typing import Any, Optional

import click
from rich.console import Console

from sdncli import __version__
from sdncli.client import AsyncSdnClient
from sdncli.config import Config, load_config
from sdncli.errors import SdnCliError
from sdncli.output import FORMATS
from sdncli.resolver import FailFastChooser, TerminalChooser

console = Console()
err_console = Console(stderr=True)

BUILTIN_COMMANDS = ("token", "cache", "request")


def _load_config(ctx: click.Context) -> Config:
    root = ctx.find_root()
    obj = root.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = load_config(root.params.get("config_path"))
    return obj["config"]


def _get_client(ctx: click.Context) -> AsyncSdnClient:
    root = ctx.find_root()
    obj = root.ensure_object(dict)
    chooser = FailFastChooser() if root.params.get("non_interactive") else TerminalChooser()
    return AsyncSdnClient(
        _load_config(ctx),
        chooser=chooser,
        console=console,
        bench_sink=lambda line: err_console.print(line, markup=False, highlight=False),
        transport=obj.get("transport"),
    )


def _output(ctx: click.Context, default: str) -> str:
    return ctx.find_root().params.get("output") or default


def _run(coro):
    try:
        return asyncio.run(coro)
    except SdnCliError as e:
        err_console.print(f"Error: {e}", style="red", markup=False, highlight=False, soft_wrap=True)
        raise SystemExit(1)


async def _with_client(ctx: click.Context, action, show_host: bool = True) -> Any:
    client = _get_client(ctx)
    try:
        result = await action(client)
        if show_host:
            console.print(f"API IP: {client.host}", highlight=False)
        return result
    finally:
        await client.aclose()


def _configure_logging(verbose: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


class ResourceCommands(click.Group):
    """Adds one sub-group per configured resource, next to the built-in commands."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        names = super().list_commands(ctx)
        try:
            config = _load_config(ctx)
        except SdnCliError:
            return names
        return names + [res.cmd for res in config.resources if res.cmd not in names]

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        from sdncli.cli.resources import make_resource_group

        try:
            config = _load_config(ctx)
        except SdnCliError as e:
            raise click.ClickException(str(e))
        for endpoint in config.resources:
            if endpoint.cmd == cmd_name:
                return make_resource_group(endpoint)
        return None


@click.group(cls=ResourceCommands)
@click.version_option(__version__)
@click.option("--config", "config_path", default=None, envvar="SDNCLI_CONFIG",
              help="Path to config.toml (default ~/.sdncli/config.toml)")
@click.option("-o", "--output", type=click.Choice(FORMATS), default=None,
              help="Output format for response")
@click.option("--non-interactive", is_flag=True,
              help="Fail instead of prompting when a name matches several resources")
@click.option("-v", "--verbose", count=True, help="-v for request logs, -vv for debug")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], output: Optional[str],
         non_interactive: bool, verbose: int):
    """A command line to manipulate SDN resources."""
    ctx.ensure_object(dict)
    _configure_logging(verbose)


# Register subcommands from separate modules
from sdncli.cli.builtin import cache_cmd, request_cmd, token_cmd

main.add_command(token_cmd)
main.add_command(cache_cmd)
main.add_command(request_cmd)


if __name__ == "__main__":
    main()
