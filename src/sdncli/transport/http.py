"""
REST dispatcher: one HTTP round trip per send(), timed and classified.

A 401 clears the cached token and the request is re-sent once with a
fresh one. Every other non-2xx status is raised as RequestError.
"""

import json
import logging
import time
from typing import Any, Callable, Optional

import httpx

from sdncli.auth import AuthSession
from sdncli.config import ApiSettings
from sdncli.errors import ConnectionError, RequestError

logger = logging.getLogger(__name__)

BenchSink = Callable[[str], None]


class Response:
    __slots__ = ("status_code", "text", "elapsed", "uri")

    def __init__(self, status_code: int, text: str, elapsed: float, uri: str = ""):
        self.status_code = status_code
        self.text = text
        self.elapsed = elapsed
        self.uri = uri

    @property
    def is_empty(self) -> bool:
        return len(self.text) == 0

    def json(self) -> Any:
        """Parsed body, or None when the body is empty or not JSON."""
        if self.is_empty:
            return None
        try:
            return json.loads(self.text)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return f"Response(status_code={self.status_code}, uri={self.uri!r}, length={len(self.text)})"


class Dispatcher:
    def __init__(
        self,
        session: AuthSession,
        api: ApiSettings,
        auth_host: str,
        client: Optional[httpx.AsyncClient] = None,
        bench_sink: Optional[BenchSink] = None,
    ):
        self._session = session
        self._host = api.host or auth_host
        self._port = api.port
        self._client = client or httpx.AsyncClient(timeout=None)
        self._bench_sink = bench_sink

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    def set_port(self, port: int) -> None:
        self._port = port

    @property
    def base_url(self) -> str:
        return f"http://{self._host}:{self._port}/"

    def url_for(self, uri: str) -> httpx.URL:
        return httpx.URL(self.base_url).join(uri)

    def _headers(self, token: str) -> dict[str, str]:
        return {"Content-Type": "application/json", "X-Auth-Token": token}

    async def _round_trip(self, method: str, url: httpx.URL, body: Optional[Any]) -> tuple[httpx.Response, float]:
        token = await self._session.ensure_token()
        if body is not None:
            logger.info(
                "curl -D - -s -X %s %s -H \"Content-Type:application/json\" -H \"X-Auth-Token:%s\" -d '%s'",
                method, url, token, json.dumps(body),
            )
        else:
            logger.info(
                "curl -D - -s -X %s %s -H \"Content-Type:application/json\" -H \"X-Auth-Token:%s\"",
                method, url, token,
            )
        started = time.perf_counter()
        try:
            resp = await self._client.request(method, url, json=body, headers=self._headers(token))
        except httpx.HTTPError as e:
            raise ConnectionError(f"{method} {url} failed: {e}")
        return resp, time.perf_counter() - started

    async def send(self, method: str, uri: str, body: Optional[Any] = None, bench: bool = True) -> Response:
        method = method.upper()
        url = self.url_for(uri)
        resp, elapsed = await self._round_trip(method, url, body)
        if resp.status_code == 401:
            logger.info("Token rejected for %s %s, re-authenticating once", method, url)
            self._session.reset()
            resp, elapsed = await self._round_trip(method, url, body)

        if bench:
            self._report(resp, elapsed)
        logger.debug("Response %s %s: %s", resp.status_code, url, resp.text)

        if not resp.is_success:
            raise RequestError(resp.status_code, resp.text, uri=uri, reason=resp.reason_phrase)
        return Response(resp.status_code, resp.text, elapsed, uri=uri)

    def _report(self, resp: httpx.Response, elapsed: float) -> None:
        length = resp.headers.get("content-length", len(resp.content))
        line = f"time: {elapsed:.6f} [status: {resp.status_code} length: {length}]"
        if self._bench_sink:
            self._bench_sink(line)
        else:
            logger.info(line)

    async def post(self, uri: str, body: Any, bench: bool = True) -> Response:
        return await self.send("POST", uri, body, bench=bench)
