"""
sdncli: command-line client for an SDN controller REST API.

Builds the uniform request envelope, resolves names to ids, dispatches
over HTTP with a Keystone-style token and renders the response.
"""

__version__ = "0.1.0"

from sdncli.client import SdnClient, AsyncSdnClient
from sdncli.auth import AuthSession
from sdncli.config import Config, ResourceEndpoint, load_config
from sdncli.errors import (
    SdnCliError,
    AuthError,
    ConfigError,
    ConnectionError,
    RequestError,
    ResponseFormatError,
    NotFoundError,
    AmbiguousNameError,
    SelectionOutOfRangeError,
    ParseError,
)
from sdncli.models.envelope import Operation
from sdncli.output import OutputRenderer
from sdncli.resolver import NameResolver, TerminalChooser, FailFastChooser
from sdncli.transport.envelope import RequestEnvelope
from sdncli.transport.http import Dispatcher

__all__ = [
    "SdnClient",
    "AsyncSdnClient",
    "AuthSession",
    "Config",
    "ResourceEndpoint",
    "load_config",
    "SdnCliError",
    "AuthError",
    "ConfigError",
    "ConnectionError",
    "RequestError",
    "ResponseFormatError",
    "NotFoundError",
    "AmbiguousNameError",
    "SelectionOutOfRangeError",
    "ParseError",
    "Operation",
    "OutputRenderer",
    "NameResolver",
    "TerminalChooser",
    "FailFastChooser",
    "RequestEnvelope",
    "Dispatcher",
]
