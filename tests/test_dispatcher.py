"""Dispatcher: URL/headers, error classification, 401 retry, timing."""

import httpx
import pytest

from sdncli.client import AsyncSdnClient
from sdncli.errors import ConnectionError, RequestError

from conftest import FakeBackend, make_config


def client_for(backend: FakeBackend, **kwargs) -> AsyncSdnClient:
    return AsyncSdnClient(make_config(**kwargs), transport=backend.transport)


@pytest.mark.asyncio
async def test_post_url_and_headers():
    backend = FakeBackend(httpx.Response(200, json=[]))
    client = client_for(backend)
    await client.dispatcher.post("/neutron/network", {"data": {}})

    req = backend.requests[0]
    assert req.method == "POST"
    assert str(req.url) == "http://10.0.0.1:8082/neutron/network"
    assert req.headers["X-Auth-Token"] == "tok-1"
    assert req.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_api_host_overrides_auth_host():
    backend = FakeBackend()
    client = client_for(backend, api_host="10.0.0.9")
    await client.dispatcher.send("GET", "/analytics/uves/vrouter/*?cfilt=NodeStatus")
    assert backend.requests[0].url.host == "10.0.0.9"
    assert backend.auth_requests[0].url.host == "10.0.0.1"
    assert client.host == "10.0.0.9"


@pytest.mark.asyncio
async def test_set_port():
    backend = FakeBackend()
    client = client_for(backend)
    client.dispatcher.set_port(9100)
    await client.dispatcher.send("GET", "/virtual-networks")
    assert backend.requests[0].url.port == 9100


@pytest.mark.asyncio
async def test_token_fetched_once_for_many_calls():
    backend = FakeBackend()
    client = client_for(backend)
    for _ in range(3):
        await client.dispatcher.post("/neutron/port", {})
    assert len(backend.auth_requests) == 1
    assert len(backend.requests) == 3


@pytest.mark.asyncio
async def test_non_2xx_raises_with_exact_body():
    body = '{"NeutronError": {"message": "Network abc could not be found"}}'
    backend = FakeBackend(httpx.Response(404, text=body))
    client = client_for(backend)
    with pytest.raises(RequestError) as exc:
        await client.dispatcher.post("/neutron/network", {})
    assert exc.value.status == 404
    assert exc.value.body == body
    assert body in str(exc.value)
    assert len(backend.requests) == 1


@pytest.mark.asyncio
async def test_empty_success_body():
    backend = FakeBackend(httpx.Response(204))
    client = client_for(backend)
    resp = await client.dispatcher.post("/neutron/network", {})
    assert resp.is_empty
    assert resp.json() is None


@pytest.mark.asyncio
async def test_401_reauthenticates_once():
    backend = FakeBackend(httpx.Response(401, text="expired"), httpx.Response(200, json={"id": "x"}))
    client = client_for(backend)
    resp = await client.dispatcher.post("/neutron/network", {})
    assert resp.json() == {"id": "x"}
    assert len(backend.auth_requests) == 2
    assert [r.headers["X-Auth-Token"] for r in backend.requests] == ["tok-1", "tok-2"]


@pytest.mark.asyncio
async def test_second_401_is_an_error():
    backend = FakeBackend(httpx.Response(401, text="expired"), httpx.Response(401, text="still expired"))
    client = client_for(backend)
    with pytest.raises(RequestError) as exc:
        await client.dispatcher.post("/neutron/network", {})
    assert exc.value.status == 401
    assert exc.value.body == "still expired"
    assert len(backend.requests) == 2


@pytest.mark.asyncio
async def test_bench_line():
    lines = []
    backend = FakeBackend(httpx.Response(200, json=[1, 2]))
    client = AsyncSdnClient(make_config(), transport=backend.transport, bench_sink=lines.append)
    resp = await client.dispatcher.post("/neutron/network", {})
    assert resp.elapsed >= 0
    assert len(lines) == 1
    assert lines[0].startswith("time: ")
    assert "[status: 200 length: " in lines[0]

    await client.dispatcher.post("/neutron/network", {}, bench=False)
    assert len(lines) == 1


@pytest.mark.asyncio
async def test_transport_failure():
    def handler(request):
        if request.url.path == "/v2.0/tokens":
            return httpx.Response(200, json={"access": {"token": {"id": "t"}}})
        raise httpx.ReadTimeout("timed out", request=request)

    client = AsyncSdnClient(make_config(), transport=httpx.MockTransport(handler))
    with pytest.raises(ConnectionError):
        await client.dispatcher.post("/neutron/network", {})
