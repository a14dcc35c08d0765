"""
Auth session: Keystone-style token acquisition.

v3 reads the token from the `x-subject-token` response header, v2 from
`access.token.id` in the JSON body. The token is cached for the life of
the session; the dispatcher calls reset() to force a refetch.
"""

import logging
from typing import Any, Optional

import httpx

from sdncli.config import AUTH_VERSIONS, AuthSettings
from sdncli.errors import AuthError, ConfigError

logger = logging.getLogger(__name__)

SUBJECT_TOKEN_HEADER = "x-subject-token"


class AuthSession:
    def __init__(self, settings: AuthSettings, client: Optional[httpx.AsyncClient] = None):
        self._settings = settings
        self._client = client or httpx.AsyncClient(timeout=None)
        self._token = ""

    @property
    def token(self) -> str:
        return self._token

    @property
    def version(self) -> str:
        version = self._settings.version.lower()
        if version not in AUTH_VERSIONS:
            raise ConfigError(
                f"Unsupported auth version {self._settings.version!r}, expected one of {', '.join(AUTH_VERSIONS)}"
            )
        return version

    def reset(self) -> None:
        self._token = ""

    async def ensure_token(self) -> str:
        if not self._token:
            self._token = await self.fetch_token()
        return self._token

    def _request(self) -> tuple[str, dict[str, Any]]:
        cfg = self._settings
        base = f"http://{cfg.host}:{cfg.port}"
        if self.version == "v3":
            return f"{base}/v3/auth/tokens", {
                "auth": {
                    "identity": {
                        "methods": ["password"],
                        "password": {
                            "user": {
                                "name": cfg.user,
                                "password": cfg.password,
                                "domain": {"name": "Default"},
                            }
                        },
                    }
                }
            }
        return f"{base}/v2.0/tokens", {
            "auth": {
                "tenantName": cfg.project,
                "passwordCredentials": {
                    "username": cfg.user,
                    "password": cfg.password,
                },
            }
        }

    async def fetch_token(self) -> str:
        """Always performs the auth flow; does not touch the cached token."""
        url, body = self._request()
        logger.info("curl -D - -s -X POST %s -H \"Content-Type:application/json\" -d '%s'", url, body)
        try:
            resp = await self._client.post(url, json=body)
        except httpx.HTTPError as e:
            raise AuthError(f"Failed to reach identity service at {url}: {e}")
        logger.debug("Auth response: %s %s", resp.status_code, resp.text)
        if not resp.is_success:
            raise AuthError(
                f"Authentication failed: HTTP {resp.status_code}\n{resp.text}",
                status=resp.status_code,
                body=resp.text,
            )

        if self.version == "v3":
            token = resp.headers.get(SUBJECT_TOKEN_HEADER)
            if not token:
                raise AuthError(
                    f"No {SUBJECT_TOKEN_HEADER} header in auth response",
                    status=resp.status_code,
                    body=resp.text,
                )
            return token

        try:
            token = resp.json()["access"]["token"]["id"]
        except (ValueError, KeyError, TypeError):
            raise AuthError(
                f"No access.token.id in auth response\n{resp.text}",
                status=resp.status_code,
                body=resp.text,
            )
        if not isinstance(token, str) or not token:
            raise AuthError(f"Invalid token in auth response\n{resp.text}", status=resp.status_code, body=resp.text)
        return token
