"""CLI: sdncli <cmd> create|update|delete|show|list|oper

One group per configured resource endpoint; every verb ends up as a
single envelope POST per name.
"""

from typing import Any, Optional

import click

from sdncli.cli.params import JSON, KEY_VALUE, split_csv
from sdncli.config import ResourceEndpoint
from sdncli.models.envelope import Operation

ATTR_HELP = "Resource attributes, add `'` for list or dict. Example: -a binding:vif_details='{\"port_filter\":true}'"
FIELD_HELP = "Fields to be displayed, example: --field=name,id"


def _run(coro):
    from sdncli.cli.main import _run
    return _run(coro)


def _with_client(ctx, action):
    from sdncli.cli.main import _with_client
    return _with_client(ctx, action)


def _output(ctx, default: str) -> str:
    from sdncli.cli.main import _output
    return _output(ctx, default)


def _fields(field: tuple[str, ...]) -> Optional[list[str]]:
    return split_csv(field) or None


def _operate(
    ctx: click.Context,
    operation: str,
    names: Optional[list[str]] = None,
    attrs: tuple[dict[str, Any], ...] = (),
    fields: Optional[list[str]] = None,
    filters: Any = None,
) -> None:
    endpoint: ResourceEndpoint = ctx.obj["endpoint"]
    pool = ctx.parent.params.get("pool") if ctx.parent else None
    fmt = _output(ctx, "table")

    async def _go(client):
        return await client.run(
            endpoint, operation,
            names=names, attributes=attrs, fields=fields, filters=filters, fmt=fmt, pool=pool,
        )

    _run(_with_client(ctx, _go))


def make_resource_group(endpoint: ResourceEndpoint) -> click.Group:
    params = []
    if endpoint.needs_pool:
        params.append(click.Option(["-p", "--pool"], required=True, help="The pool this member belong to"))

    @click.pass_context
    def group(ctx: click.Context, **kwargs: Any):
        ctx.obj = {**ctx.ensure_object(dict), "endpoint": endpoint}

    grp = click.Group(name=endpoint.cmd, callback=group, params=params, help=f"- {endpoint.type}")

    @grp.command("create")
    @click.argument("name")
    @click.option("-a", "--attr", "attrs", type=KEY_VALUE, multiple=True, help=ATTR_HELP)
    @click.pass_context
    def create(ctx, name, attrs):
        """Create a resource."""
        _operate(ctx, Operation.CREATE, names=[name], attrs=attrs)

    @grp.command("update")
    @click.argument("names", nargs=-1, required=True)
    @click.option("-a", "--attr", "attrs", type=KEY_VALUE, multiple=True, help=ATTR_HELP)
    @click.pass_context
    def update(ctx, names, attrs):
        """Update resource(s) with some attributes. NAMES: ID or name, comma separated."""
        _operate(ctx, Operation.UPDATE, names=split_csv(names), attrs=attrs)

    @grp.command("delete")
    @click.argument("names", nargs=-1, required=True)
    @click.pass_context
    def delete(ctx, names):
        """Delete resource(s). NAMES: ID or name, comma separated."""
        _operate(ctx, Operation.DELETE, names=split_csv(names))

    @grp.command("show")
    @click.argument("names", nargs=-1, required=True)
    @click.option("-f", "--field", multiple=True, help=FIELD_HELP)
    @click.pass_context
    def show(ctx, names, field):
        """Display detail for some resource(s)."""
        _operate(ctx, Operation.READ, names=split_csv(names), fields=_fields(field))

    @grp.command("list")
    @click.option("--filter", "filters", type=JSON, default=None,
                  help='JSON filter, example: --filter=\'{"id":["6bd0768b-0beb-4b30-9916-a3c445fede1c"],"marker":0,"limit":10}\'')
    @click.option("-f", "--field", multiple=True, help=FIELD_HELP)
    @click.pass_context
    def list_(ctx, filters, field):
        """Display all resources."""
        _operate(ctx, Operation.READALL, fields=_fields(field), filters=filters)

    @grp.command("oper")
    @click.option("-n", "--name", required=True, help="ID or name of the resource")
    @click.option("--cmd", "operation", required=True, help="Operation string for resource, see the REST API doc")
    @click.option("-a", "--attr", "attrs", type=KEY_VALUE, multiple=True, help=ATTR_HELP)
    @click.option("-f", "--field", multiple=True, help=FIELD_HELP)
    @click.pass_context
    def oper(ctx, name, operation, attrs, field):
        """Run a custom operation on a resource."""
        _operate(ctx, Operation.custom(operation), names=[name], attrs=attrs, fields=_fields(field))

    return grp
