"""CLI: sdncli token|cache|request"""

from typing import Any, Optional

import click

from sdncli.cli.params import JSON


def _run(coro):
    from sdncli.cli.main import _run
    return _run(coro)


def _with_client(ctx, action, show_host: bool = True):
    from sdncli.cli.main import _with_client
    return _with_client(ctx, action, show_host)


def _output(ctx, default: str) -> str:
    from sdncli.cli.main import _output
    return _output(ctx, default)


@click.command("token")
@click.pass_context
def token_cmd(ctx: click.Context):
    """Get auth token."""

    async def _token(client):
        click.echo(await client.token())

    _run(_with_client(ctx, _token, show_host=False))


@click.command("cache")
@click.pass_context
def cache_cmd(ctx: click.Context):
    """Get API cache."""
    fmt = _output(ctx, "json")
    _run(_with_client(ctx, lambda client: client.cache(fmt)))


@click.command("request")
@click.argument("uri")
@click.option("-m", "--method", type=click.Choice(["get", "post", "delete"], case_sensitive=False),
              default="get", help="Request method")
@click.option("-d", "--data", type=JSON, default=None, help="Request data (JSON), implies POST")
@click.option("-p", "--port", type=int, default=None, help="API port for this request")
@click.pass_context
def request_cmd(ctx: click.Context, uri: str, method: str, data: Optional[Any], port: Optional[int]):
    """Send a request to any API URI."""
    fmt = _output(ctx, "json")
    _run(_with_client(ctx, lambda client: client.request(uri, method=method, data=data, port=port, fmt=fmt)))
