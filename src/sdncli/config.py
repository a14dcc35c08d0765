"""
Configuration: auth/API settings and the resource registry.

Loaded from a TOML file:

    [auth]
    host = "10.0.0.1"
    port = 6000
    user = "admin"
    password = "secret"
    project = "admin"
    version = "v2"

    [api]
    port = 8082

    [[resource]]
    cmd = "net"
    type = "network"
    uri = "/neutron/network"
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from sdncli.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "SDNCLI_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".sdncli" / "config.toml"

AUTH_VERSIONS = ("v2", "v3")
POOL_PLACEHOLDER = "<pool_id>"
POOL_URI = "/neutron/pool"


class AuthSettings(BaseModel):
    host: str
    port: int = 6000
    user: str
    password: str
    project: str = ""
    version: str = "v2"


class ApiSettings(BaseModel):
    host: Optional[str] = None
    port: int = 8082


class AttrHint(BaseModel):
    key: str
    value: Any = None


class ResourceEndpoint(BaseModel):
    cmd: str
    type: str
    uri: str
    attr: list[AttrHint] = Field(default_factory=list)

    @property
    def needs_pool(self) -> bool:
        return POOL_PLACEHOLDER in self.uri


def _neutron(cmd: str, type: str, uri: Optional[str] = None) -> ResourceEndpoint:
    return ResourceEndpoint(cmd=cmd, type=type, uri=uri or f"/neutron/{type}")


DEFAULT_RESOURCES: list[ResourceEndpoint] = [
    _neutron("net", "network"),
    _neutron("subnet", "subnet"),
    _neutron("port", "port"),
    _neutron("router", "router"),
    _neutron("sg", "security_group"),
    _neutron("sgr", "security_group_rule"),
    _neutron("fip", "floatingip"),
    _neutron("lb", "loadbalancer"),
    _neutron("lbl", "listener"),
    _neutron("lbp", "pool"),
    _neutron("lbm", "member", f"{POOL_URI}/{POOL_PLACEHOLDER}/member"),
    _neutron("fw", "firewall_group"),
    _neutron("fwp", "firewall_policy"),
    _neutron("fwr", "firewall_rule"),
    _neutron("sfw", "segment_firewall_group"),
    _neutron("sfwp", "segment_firewall_policy"),
    _neutron("sfwr", "segment_firewall_rule"),
    _neutron("tag", "tag"),
    _neutron("provider", "net_provider"),
]


class Config(BaseModel):
    auth: AuthSettings
    api: ApiSettings = Field(default_factory=ApiSettings)
    resource: list[ResourceEndpoint] = Field(default_factory=list)

    @property
    def resources(self) -> list[ResourceEndpoint]:
        return self.resource or DEFAULT_RESOURCES

    @property
    def api_host(self) -> str:
        """REST host, falling back to the auth host when not set."""
        return self.api.host or self.auth.host

    def get_resource(self, cmd: str) -> ResourceEndpoint:
        for res in self.resources:
            if res.cmd == cmd:
                return res
        raise ConfigError(f"No resource found for command {cmd}, please check config.toml")


def config_path(path: Optional[str] = None) -> Path:
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_FILE


def parse_config(data: dict[str, Any]) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Optional[str] = None) -> Config:
    file = config_path(path)
    try:
        data = tomllib.loads(file.read_text())
    except FileNotFoundError as e:
        raise ConfigError(f"Config file {file} not found") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse {file}: {e}") from e
    config = parse_config(data)
    logger.debug("Loaded config from %s: %d resources", file, len(config.resources))
    return config
