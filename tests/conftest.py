"""Shared fixtures: a config and a fake identity + API backend on httpx.MockTransport."""

import itertools
import json
from typing import Any, Optional

import httpx
import pytest

from sdncli.config import Config, parse_config

AUTH_HOST = "10.0.0.1"


def make_config(version: str = "v2", api_host: Optional[str] = None,
                resources: Optional[list[dict[str, Any]]] = None) -> Config:
    return parse_config({
        "auth": {
            "host": AUTH_HOST,
            "port": 6000,
            "user": "admin",
            "password": "secret",
            "project": "demo",
            "version": version,
        },
        "api": {"host": api_host, "port": 8082},
        "resource": resources or [],
    })


class FakeBackend:
    """Answers both auth flows with tok-1, tok-2, ... and replays queued API responses."""

    def __init__(self, *responses: httpx.Response):
        self.auth_requests: list[httpx.Request] = []
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        self._tokens = (f"tok-{i}" for i in itertools.count(1))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v2.0/tokens":
            self.auth_requests.append(request)
            return httpx.Response(200, json={"access": {"token": {"id": next(self._tokens)}}})
        if request.url.path == "/v3/auth/tokens":
            self.auth_requests.append(request)
            return httpx.Response(201, headers={"x-subject-token": next(self._tokens)}, json={"token": {}})
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json=[])
        return self._responses.pop(0)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def bodies(self) -> list[Any]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def config() -> Config:
    return make_config()
