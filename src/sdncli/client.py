"""
SdnClient / AsyncSdnClient: the request engine wired together.

    async with AsyncSdnClient(load_config()) as client:
        net = client.config.get_resource("net")
        await client.run(net, Operation.READ, names=["demo"], fields=["id", "name"])
"""

import asyncio
import logging
from typing import Any, Iterable, Optional

import httpx
from rich.console import Console

from sdncli.auth import AuthSession
from sdncli.config import POOL_PLACEHOLDER, POOL_URI, Config, ResourceEndpoint
from sdncli.errors import ConfigError
from sdncli.models.envelope import Operation
from sdncli.output import OutputRenderer
from sdncli.resolver import Chooser, NameResolver, parse_uuid
from sdncli.transport.envelope import RequestEnvelope
from sdncli.transport.http import BenchSink, Dispatcher, Response

logger = logging.getLogger(__name__)

CACHE_URI = "/obj-cache"
CACHE_COUNT = 999999


class AsyncSdnClient:
    """Async client (primary). One instance per CLI invocation."""

    def __init__(
        self,
        config: Config,
        chooser: Optional[Chooser] = None,
        console: Optional[Console] = None,
        bench_sink: Optional[BenchSink] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._http = httpx.AsyncClient(transport=transport, timeout=None)
        self.session = AuthSession(config.auth, client=self._http)
        self.dispatcher = Dispatcher(
            self.session, config.api, config.auth.host, client=self._http, bench_sink=bench_sink,
        )
        self.resolver = NameResolver(self.dispatcher, chooser)
        self.renderer = OutputRenderer(console)

    @property
    def host(self) -> str:
        return self.dispatcher.host

    async def token(self) -> str:
        return await self.session.fetch_token()

    async def resolve(self, uri: str, name: str) -> str:
        return await self.resolver.resolve(uri, name)

    async def endpoint_uri(self, endpoint: ResourceEndpoint, pool: Optional[str] = None) -> str:
        if not endpoint.needs_pool:
            return endpoint.uri
        if not pool:
            raise ConfigError(f"Resource {endpoint.cmd} ({endpoint.type}) requires a pool")
        pool_id = await self.resolve(POOL_URI, pool)
        return endpoint.uri.replace(POOL_PLACEHOLDER, pool_id)

    async def run(
        self,
        endpoint: ResourceEndpoint,
        operation: str,
        names: Optional[list[str]] = None,
        attributes: Iterable[dict[str, Any]] = (),
        fields: Optional[list[str]] = None,
        filters: Any = None,
        fmt: str = "table",
        pool: Optional[str] = None,
    ) -> list[Response]:
        """Run one resource operation. Names are processed in order, one request each."""
        uri = await self.endpoint_uri(endpoint, pool)
        oper = operation.upper()
        logger.debug("%s %s on %s, names=%s", oper, endpoint.type, uri, names)
        builder = RequestEnvelope().set_type(endpoint.type).set_operation(oper)
        if filters is not None:
            builder.set_filters(filters)
        if fields:
            builder.set_fields(fields)
        for fragment in attributes:
            builder.merge_attributes(fragment)

        if not names:
            resp = await self.dispatcher.post(uri, builder.build())
            self.renderer.render(resp.text, fmt, fields)
            return [resp]

        responses = []
        for name in names:
            # Only CREATE sets the name; an UPDATE may carry a new one in attributes.
            if oper == Operation.CREATE:
                builder.set_name(name)
            elif parse_uuid(name) is not None:
                builder.set_id(name)
            else:
                builder.set_id(await self.resolve(uri, name))
            resp = await self.dispatcher.post(uri, builder.build())
            self.renderer.render(resp.text, fmt, fields)
            responses.append(resp)
        return responses

    async def request(
        self,
        uri: str,
        method: str = "GET",
        data: Any = None,
        port: Optional[int] = None,
        fmt: str = "json",
    ) -> Response:
        """Raw request to any API path; POST when data is given."""
        if port is not None:
            self.dispatcher.set_port(port)
        if data is not None:
            method = "POST"
        resp = await self.dispatcher.send(method, uri, data)
        self.renderer.render(resp.text, fmt)
        return resp

    async def cache(self, fmt: str = "json") -> Response:
        resp = await self.dispatcher.post(CACHE_URI, {"count": CACHE_COUNT})
        self.renderer.render(resp.text, fmt)
        return resp

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncSdnClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()


class SdnClient:
    """Sync wrapper around AsyncSdnClient. Runs the event loop internally."""

    def __init__(self, config: Config, **kwargs: Any):
        self._async = AsyncSdnClient(config, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def config(self) -> Config:
        return self._async.config

    @property
    def host(self) -> str:
        return self._async.host

    def token(self) -> str:
        return self._run(self._async.token())

    def resolve(self, uri: str, name: str) -> str:
        return self._run(self._async.resolve(uri, name))

    def run(self, endpoint: ResourceEndpoint, operation: str, **kwargs: Any) -> list[Response]:
        return self._run(self._async.run(endpoint, operation, **kwargs))

    def request(self, uri: str, **kwargs: Any) -> Response:
        return self._run(self._async.request(uri, **kwargs))

    def cache(self, fmt: str = "json") -> Response:
        return self._run(self._async.cache(fmt))

    def close(self) -> None:
        try:
            self._run(self._async.aclose())
        finally:
            self._loop.close()

    def __enter__(self) -> "SdnClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
