"""
sdncli error types.

Every error carries a short machine code plus enough context (URI, name,
HTTP status, raw body) for an operator to retry by hand.
"""

from typing import Any, Optional


class SdnCliError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ConfigError(SdnCliError):
    def __init__(self, message: str):
        super().__init__("config_error", message)


class AuthError(SdnCliError):
    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__("auth_error", message, {"status": status, "body": body})
        self.status = status
        self.body = body


class ConnectionError(SdnCliError):
    def __init__(self, message: str):
        super().__init__("connection_error", message)


class RequestError(SdnCliError):
    """Non-2xx response. The message ends with the response body verbatim."""

    def __init__(self, status: int, body: str, uri: str = "", reason: str = ""):
        head = f"HTTP {status} {reason}".rstrip()
        if uri:
            head = f"{head} for {uri}"
        super().__init__("request_error", f"{head}\n{body}", {"status": status, "uri": uri})
        self.status = status
        self.body = body
        self.uri = uri


class ResponseFormatError(SdnCliError):
    def __init__(self, message: str, body: str = ""):
        super().__init__("response_format_error", message, {"body": body})
        self.body = body


class NotFoundError(SdnCliError):
    def __init__(self, uri: str, name: str):
        resource = uri.rstrip("/").split("/")[-1]
        super().__init__("not_found", f"{resource} {name} Not Found", {"uri": uri, "name": name})
        self.uri = uri
        self.name = name


class AmbiguousNameError(SdnCliError):
    def __init__(self, name: str, candidates: list[dict[str, Any]]):
        ids = ", ".join(str(c.get("id")) for c in candidates)
        super().__init__(
            "ambiguous_name",
            f"Found {len(candidates)} resources named {name}: {ids}",
            {"name": name, "candidates": candidates},
        )
        self.name = name
        self.candidates = candidates


class SelectionOutOfRangeError(SdnCliError):
    def __init__(self, index: int, count: int):
        super().__init__(
            "selection_out_of_range",
            f"Your select {index} is not in range 0-{count - 1}",
            {"index": index, "count": count},
        )
        self.index = index
        self.count = count


class ParseError(SdnCliError):
    def __init__(self, message: str):
        super().__init__("parse_error", message)
